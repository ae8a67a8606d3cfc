"""Shared pytest fixtures."""

from typing import Callable, List

import pytest

from einstein_puzzle import (
    PuzzleBoard,
    PuzzleConfig,
    PuzzlePiece,
    create_puzzle_pieces,
    generate_grid_polygons,
    layout_pieces,
)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def config() -> PuzzleConfig:
    """The default 600px board."""
    return PuzzleConfig(image_url="test.png")


def build_board(canvas_size: float = 600.0, rows: int = 1, cols: int = 1, num_missing: int = 1) -> PuzzleBoard:
    """A laid-out grid board with a 30px snap threshold."""
    pieces: List[PuzzlePiece] = create_puzzle_pieces(generate_grid_polygons(canvas_size, rows, cols))
    layout_pieces(pieces, num_missing, canvas_size)
    return PuzzleBoard(pieces, snap_threshold=30.0)


@pytest.fixture
def make_board() -> Callable[..., PuzzleBoard]:
    """Factory for laid-out grid boards."""
    return build_board


@pytest.fixture
def single_piece_board() -> PuzzleBoard:
    """One 600x600 piece anchored at (300, 300), waiting in the tray at (650, 50)."""
    return build_board()
