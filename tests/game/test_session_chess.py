"""Tests for GameSession playing chess."""

from __future__ import annotations

import pytest

from topoboard.core.board import Board
from topoboard.core.enums import Color, GameResult, PieceType, Rejection, Topology
from topoboard.core.notation import board_from_diagram
from topoboard.core.piece import Piece
from topoboard.game.config import GameConfig
from topoboard.game.interfaces import GameEndReason
from topoboard.game.session import GameSession

KINGS_ONLY = """
....k...
........
........
........
........
........
........
....K...
"""


def _session(topology: Topology = Topology.CLASSIC) -> GameSession:
    return GameSession(GameConfig.chess(topology))


def _custom(
    board: Board,
    side: Color = Color.WHITE,
    topology: Topology = Topology.CLASSIC,
) -> GameSession:
    session = _session(topology)
    session.reset(board=board, side_to_move=side)
    return session


class TestTurnFlow:
    def test_white_moves_first(self) -> None:
        session = _session()
        assert session.side_to_move == Color.WHITE
        assert session.attempt_chess_move((6, 4), (4, 4))
        assert session.side_to_move == Color.BLACK
        assert session.last_rejection is None
        assert session.last_move == (4, 4)

    def test_turns_alternate(self) -> None:
        session = _session()
        assert session.attempt_chess_move((6, 4), (4, 4))
        assert session.attempt_chess_move((1, 4), (3, 4))
        assert session.side_to_move == Color.WHITE
        assert len(session.state.history) == 2

    def test_legal_moves_for_side_to_move(self) -> None:
        session = _session()
        assert session.legal_moves(7, 6) == [(5, 5), (5, 7)]

    def test_legal_moves_empty_for_opponent(self) -> None:
        assert _session().legal_moves(0, 1) == []

    def test_legal_moves_accepts_raw_coordinates_on_wrapped_board(self) -> None:
        session = _session(Topology.ROLLOVER)
        assert session.legal_moves(15, 9) == session.legal_moves(7, 1)

    def test_legal_moves_off_classic_board(self) -> None:
        assert _session().legal_moves(8, 0) == []


class TestRejections:
    def test_not_your_turn(self) -> None:
        session = _session()
        before = session.fingerprint()
        assert not session.attempt_chess_move((1, 4), (3, 4))
        assert session.last_rejection == Rejection.NOT_YOUR_TURN
        assert session.fingerprint() == before
        assert session.side_to_move == Color.WHITE

    def test_no_piece(self) -> None:
        session = _session()
        assert not session.attempt_chess_move((4, 4), (3, 4))
        assert session.last_rejection == Rejection.NO_PIECE_AT_SOURCE

    def test_illegal_destination(self) -> None:
        session = _session()
        before = session.fingerprint()
        assert not session.attempt_chess_move((6, 4), (3, 4))
        assert session.last_rejection == Rejection.ILLEGAL_DESTINATION
        assert session.fingerprint() == before
        assert session.state.history == []

    def test_out_of_bounds(self) -> None:
        session = _session()
        assert not session.attempt_chess_move((6, 4), (-1, 4))
        assert session.last_rejection == Rejection.OUT_OF_BOUNDS

    def test_wrong_game(self) -> None:
        session = _session()
        assert not session.attempt_go_placement(4, 4)
        assert session.last_rejection == Rejection.WRONG_GAME
        assert not session.pass_turn()
        assert session.last_rejection == Rejection.WRONG_GAME

    def test_success_clears_last_rejection(self) -> None:
        session = _session()
        session.attempt_chess_move((4, 4), (3, 4))
        assert session.attempt_chess_move((6, 4), (5, 4))
        assert session.last_rejection is None

    def test_invalid_promotion_type_raises(self) -> None:
        with pytest.raises(ValueError):
            _session().attempt_chess_move((6, 4), (5, 4), PieceType.KING)


class TestWrappedPlay:
    def test_rollover_knight_captures_queen_on_first_move(self) -> None:
        session = _session(Topology.ROLLOVER)
        assert session.attempt_chess_move((7, 1), (0, 3))
        assert session.captures(Color.WHITE) == 1
        assert session.board[0, 3] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_raw_destination_is_canonicalized(self) -> None:
        session = _session(Topology.ROLLOVER)
        assert session.attempt_chess_move((7, 1), (8, 3))
        assert session.board[0, 3] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_mirror_seam_reverses_pawn(self) -> None:
        board = board_from_diagram(
            """
            k.......
            ........
            ........
            ........
            ........
            ........
            ........
            .......K
            """
        )
        board[0, 3] = Piece(Color.BLACK, PieceType.PAWN, direction=-1)
        board[0, 4] = Piece(Color.WHITE, PieceType.KNIGHT)
        session = _custom(board, Color.BLACK, Topology.MIRROR)

        assert session.attempt_chess_move((0, 3), (0, 4))
        assert session.board[0, 4] == Piece(Color.BLACK, PieceType.PAWN, direction=1)

        assert session.attempt_chess_move((7, 7), (7, 6))
        assert (1, 4) in session.legal_moves(0, 4)


class TestPromotion:
    def _board(self) -> Board:
        board = board_from_diagram(KINGS_ONLY)
        board[1, 0] = Piece(Color.WHITE, PieceType.PAWN)
        return board

    def test_defaults_to_queen(self) -> None:
        session = _custom(self._board())
        assert session.attempt_chess_move((1, 0), (0, 0))
        assert session.board[0, 0] == Piece(Color.WHITE, PieceType.QUEEN)
        assert session.state.history[-1].promoted_to == PieceType.QUEEN

    def test_chosen_piece(self) -> None:
        session = _custom(self._board())
        assert session.attempt_chess_move((1, 0), (0, 0), PieceType.KNIGHT)
        assert session.board[0, 0] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_black_promotes_on_last_row(self) -> None:
        board = board_from_diagram(KINGS_ONLY)
        board[6, 0] = Piece(Color.BLACK, PieceType.PAWN)
        session = _custom(board, Color.BLACK)
        assert session.attempt_chess_move((6, 0), (7, 0), PieceType.ROOK)
        assert session.board[7, 0] == Piece(Color.BLACK, PieceType.ROOK)


class TestGameEnd:
    def _board(self) -> Board:
        board = board_from_diagram(KINGS_ONLY)
        board[4, 4] = Piece(Color.WHITE, PieceType.ROOK)
        return board

    def test_capturing_king_wins(self) -> None:
        session = _custom(self._board())
        assert session.attempt_chess_move((4, 4), (0, 4))
        assert session.is_game_over
        assert session.result == GameResult.WHITE_WINS
        assert session.winner == Color.WHITE
        assert session.snapshot().end_reason == GameEndReason.KING_CAPTURED
        assert session.side_to_move == Color.WHITE

    def test_moves_after_game_over_rejected(self) -> None:
        session = _custom(self._board())
        session.attempt_chess_move((4, 4), (0, 4))
        assert not session.attempt_chess_move((7, 4), (6, 4))
        assert session.last_rejection == Rejection.GAME_ALREADY_OVER
        assert session.legal_moves(7, 4) == []

    def test_resign(self) -> None:
        session = _session()
        assert session.resign(Color.WHITE)
        assert session.result == GameResult.BLACK_WINS
        assert not session.resign(Color.BLACK)
        assert session.last_rejection == Rejection.GAME_ALREADY_OVER


class TestUndoReset:
    def test_undo_move(self) -> None:
        session = _session()
        start = session.fingerprint()
        session.attempt_chess_move((6, 4), (4, 4))
        assert session.undo()
        assert session.fingerprint() == start
        assert session.side_to_move == Color.WHITE
        assert session.last_move is None

    def test_undo_capture_restores_count(self) -> None:
        session = _session(Topology.ROLLOVER)
        session.attempt_chess_move((7, 1), (0, 3))
        session.undo()
        assert session.captures(Color.WHITE) == 0
        assert session.board[0, 3] == Piece(Color.BLACK, PieceType.QUEEN)

    def test_nothing_to_undo(self) -> None:
        session = _session()
        assert not session.undo()
        assert session.last_rejection == Rejection.NOTHING_TO_UNDO

    def test_reset_restores_start(self) -> None:
        session = _session()
        session.attempt_chess_move((6, 4), (4, 4))
        session.reset()
        assert session.board == Board.initial_chess()
        assert session.side_to_move == Color.WHITE
        assert not session.state.can_undo

    def test_reset_can_switch_topology(self) -> None:
        session = _session()
        session.reset(GameConfig.chess(Topology.MIRROR))
        assert session.topology == Topology.MIRROR


class TestEvents:
    def test_action_and_game_over_events(self) -> None:
        board = board_from_diagram(KINGS_ONLY)
        board[4, 4] = Piece(Color.WHITE, PieceType.ROOK)
        session = _custom(board)
        actions: list[object] = []
        results: list[GameResult] = []
        session.events.on_action.append(lambda record, _state: actions.append(record))
        session.events.on_game_over.append(results.append)

        session.attempt_chess_move((4, 4), (0, 4))
        assert len(actions) == 1
        assert results == [GameResult.WHITE_WINS]

    def test_rejected_event(self) -> None:
        session = _session()
        reasons: list[Rejection] = []
        session.events.on_rejected.append(reasons.append)
        session.attempt_chess_move((1, 4), (3, 4))
        assert reasons == [Rejection.NOT_YOUR_TURN]

    def test_reset_event(self) -> None:
        session = _session()
        calls: list[int] = []
        session.events.on_reset.append(lambda: calls.append(1))
        session.reset()
        assert calls == [1]
