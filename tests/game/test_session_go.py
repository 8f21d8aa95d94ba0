"""Tests for GameSession playing Go."""

from __future__ import annotations

from topoboard.core.board import Board
from topoboard.core.enums import Color, GameKind, GameResult, Rejection, Topology
from topoboard.core.notation import board_from_diagram
from topoboard.game.config import GameConfig
from topoboard.game.interfaces import GameEndReason
from topoboard.game.session import GameSession


def _session(topology: Topology = Topology.CLASSIC, *, superko: bool = False) -> GameSession:
    return GameSession(GameConfig(GameKind.GO, topology, 9, superko))


def _from(
    board: Board, topology: Topology = Topology.CLASSIC, *, superko: bool = False
) -> GameSession:
    session = _session(topology, superko=superko)
    session.reset(board=board, side_to_move=Color.BLACK)
    return session


class TestPlacement:
    def test_black_plays_first(self) -> None:
        session = _session()
        assert session.side_to_move == Color.BLACK
        assert session.attempt_go_placement(4, 4)
        assert session.board[4, 4] == Color.BLACK
        assert session.side_to_move == Color.WHITE
        assert session.last_move == (4, 4)

    def test_occupied(self) -> None:
        session = _session()
        session.attempt_go_placement(4, 4)
        assert not session.attempt_go_placement(4, 4)
        assert session.last_rejection == Rejection.OCCUPIED_CELL
        assert session.side_to_move == Color.WHITE

    def test_raw_coordinates_wrap_on_rollover(self) -> None:
        session = _session(Topology.ROLLOVER)
        assert session.attempt_go_placement(-1, 9)
        assert session.board[8, 0] == Color.BLACK
        assert session.last_move == (8, 0)

    def test_raw_coordinates_reflect_on_mirror(self) -> None:
        session = _session(Topology.MIRROR)
        assert session.attempt_go_placement(9, 2)
        assert session.board[8, 2] == Color.BLACK

    def test_out_of_bounds_on_classic(self) -> None:
        session = _session()
        assert not session.attempt_go_placement(-1, 0)
        assert session.last_rejection == Rejection.OUT_OF_BOUNDS

    def test_wrong_game(self) -> None:
        session = _session()
        assert not session.attempt_chess_move((0, 0), (1, 0))
        assert session.last_rejection == Rejection.WRONG_GAME
        assert session.legal_moves(0, 0) == []


class TestCaptures:
    def test_capture_counts(self) -> None:
        board = board_from_diagram(
            """
            .........
            .........
            .........
            ....x....
            ...xo....
            ....x....
            .........
            .........
            .........
            """
        )
        session = _from(board)
        assert session.attempt_go_placement(4, 5)
        assert session.board[4, 4] is None
        assert session.captures(Color.BLACK) == 1
        assert session.captures(Color.WHITE) == 0
        assert session.state.history[-1].captured == 1

    def test_suicide_rejected_atomically(self) -> None:
        board = board_from_diagram(
            """
            .o.......
            o........
            .........
            .........
            .........
            .........
            .........
            .........
            .........
            """
        )
        session = _from(board)
        before = session.snapshot()
        assert not session.attempt_go_placement(0, 0)
        assert session.last_rejection == Rejection.SUICIDE_MOVE
        assert session.snapshot() == before
        assert session.state.history == []

    def test_same_shape_is_legal_on_torus(self) -> None:
        board = board_from_diagram(
            """
            .o.......
            o........
            .........
            .........
            .........
            .........
            .........
            .........
            .........
            """
        )
        session = _from(board, Topology.ROLLOVER)
        assert session.attempt_go_placement(0, 0)


class TestKo:
    def test_immediate_recapture_rejected(self, ko_board: Board) -> None:
        session = _from(ko_board)
        assert session.attempt_go_placement(2, 3)
        assert session.captures(Color.BLACK) == 1

        before = session.fingerprint()
        assert not session.attempt_go_placement(2, 2)
        assert session.last_rejection == Rejection.KO_VIOLATION
        assert session.fingerprint() == before
        assert session.side_to_move == Color.WHITE

    def test_recapture_allowed_after_exchange_elsewhere(self, ko_board: Board) -> None:
        session = _from(ko_board)
        session.attempt_go_placement(2, 3)
        assert session.attempt_go_placement(8, 8)
        assert session.attempt_go_placement(8, 0)
        assert session.attempt_go_placement(2, 2)
        assert session.captures(Color.WHITE) == 1
        assert session.board[2, 3] is None

    def test_superko_session_still_rejects_simple_ko(self, ko_board: Board) -> None:
        session = _from(ko_board, superko=True)
        assert session.config.superko
        session.attempt_go_placement(2, 3)
        assert not session.attempt_go_placement(2, 2)
        assert session.last_rejection == Rejection.KO_VIOLATION

    def test_superko_history_grows_with_placements(self) -> None:
        session = _session(superko=True)
        session.attempt_go_placement(0, 0)
        session.attempt_go_placement(0, 1)
        assert len(session.state.fingerprints) == 3


class TestPassing:
    def test_double_pass_ends_game(self) -> None:
        session = _session()
        assert session.attempt_go_placement(4, 4)
        assert session.pass_turn()
        assert session.pass_count == 1
        assert session.pass_turn()
        assert session.is_game_over
        assert session.result == GameResult.BLACK_WINS
        assert session.winner == Color.BLACK
        assert session.snapshot().end_reason == GameEndReason.DOUBLE_PASS

    def test_empty_board_double_pass_is_draw(self) -> None:
        session = _session()
        session.pass_turn()
        session.pass_turn()
        assert session.result == GameResult.DRAW
        assert session.winner is None

    def test_placement_resets_pass_count(self) -> None:
        session = _session()
        session.pass_turn()
        session.attempt_go_placement(4, 4)
        assert session.pass_count == 0
        session.pass_turn()
        assert not session.is_game_over

    def test_no_actions_after_game_over(self) -> None:
        session = _session()
        session.pass_turn()
        session.pass_turn()
        before = session.fingerprint()
        assert not session.attempt_go_placement(4, 4)
        assert session.last_rejection == Rejection.GAME_ALREADY_OVER
        assert not session.pass_turn()
        assert not session.undo()
        assert session.fingerprint() == before


class TestUndo:
    def test_undo_capture(self, ko_board: Board) -> None:
        session = _from(ko_board)
        start = session.fingerprint()
        session.attempt_go_placement(2, 3)
        assert session.undo()
        assert session.fingerprint() == start
        assert session.captures(Color.BLACK) == 0
        assert session.side_to_move == Color.BLACK
        assert session.state.previous_fingerprint is None

    def test_undo_pass(self) -> None:
        session = _session()
        session.pass_turn()
        assert session.undo()
        assert session.pass_count == 0
        assert session.side_to_move == Color.BLACK


class TestEvents:
    def test_game_over_event_on_double_pass(self) -> None:
        session = _session()
        results: list[GameResult] = []
        session.events.on_game_over.append(results.append)
        session.pass_turn()
        assert results == []
        session.pass_turn()
        assert results == [GameResult.DRAW]

    def test_rejected_event_carries_reason(self) -> None:
        session = _session()
        reasons: list[Rejection] = []
        session.events.on_rejected.append(reasons.append)
        session.attempt_go_placement(4, 4)
        session.attempt_go_placement(4, 4)
        assert reasons == [Rejection.OCCUPIED_CELL]
