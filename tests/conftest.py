"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from topoboard.core.board import Board
from topoboard.core.notation import board_from_diagram

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for bridge tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def ko_board() -> Board:
    """9x9 position where black captures at (2, 3) and white could retake."""
    return board_from_diagram(
        """
        .........
        ..xo.....
        .xo.o....
        ..xo.....
        .........
        .........
        .........
        .........
        .........
        """
    )
