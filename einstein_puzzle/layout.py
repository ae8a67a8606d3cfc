"""Initial placement of puzzle pieces.

A contiguous run of pieces is taken off the board; every other piece starts
on its anchor. The displaced pieces are put in the storage tray to the right
of the board, or scattered randomly over the tray or the board.
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .models import SCATTER_STRATEGIES, PuzzlePiece, ScatterStrategy

logger = logging.getLogger(__name__)

# Preferred first displaced index; interior tiles cover the picture's subject
PREFERRED_START_INDEX = 10

# Tray grid geometry, relative to the right edge of the board
TRAY_MARGIN = 50
TRAY_SPACING = 70
TRAY_COLUMNS = 3

# Tray panel, used by the random tray scatter
TRAY_PANEL_GAP = 20
TRAY_PANEL_WIDTH = 260


def missing_start_index(total: int, num_missing: int) -> int:
    """First index of the displaced run, never negative."""
    return max(0, min(PREFERRED_START_INDEX, total - num_missing))


def select_missing_indices(total: int, num_missing: int) -> List[int]:
    """Indices of the pieces to take off the board.

    Args:
        total: Number of pieces.
        num_missing: Number of pieces to displace.

    Returns:
        ``num_missing`` consecutive indices.

    Raises:
        ValueError: If ``num_missing`` is negative or larger than ``total``.
    """
    if num_missing < 0 or num_missing > total:
        raise ValueError(f"num_missing must be between 0 and {total}, got {num_missing}")
    start = missing_start_index(total, num_missing)
    return list(range(start, start + num_missing))


def tray_origin(canvas_size: float) -> Tuple[float, float]:
    """Position of the first tray slot."""
    return (canvas_size + TRAY_MARGIN, TRAY_MARGIN)


def tray_grid_position(slot: int, canvas_size: float) -> Tuple[float, float]:
    """Position of tray slot ``slot``, filled row by row in three columns."""
    tray_x, tray_y = tray_origin(canvas_size)
    return (
        tray_x + (slot % TRAY_COLUMNS) * TRAY_SPACING,
        tray_y + (slot // TRAY_COLUMNS) * TRAY_SPACING,
    )


def tray_bounds(canvas_size: float) -> Tuple[float, float, float, float]:
    """(x_min, y_min, x_max, y_max) of the tray panel."""
    x_min = canvas_size + TRAY_PANEL_GAP
    return (x_min, 0.0, x_min + TRAY_PANEL_WIDTH, canvas_size)


def _scatter_position(
    slot: int,
    canvas_size: float,
    scatter: ScatterStrategy,
    rng: random.Random,
) -> Tuple[float, float]:
    if scatter == "tray_grid":
        return tray_grid_position(slot, canvas_size)
    if scatter == "tray_random":
        x_min, y_min, x_max, y_max = tray_bounds(canvas_size)
        return (rng.uniform(x_min, x_max), rng.uniform(y_min, y_max))
    return (rng.uniform(0.0, canvas_size), rng.uniform(0.0, canvas_size))


def layout_pieces(
    pieces: Sequence[PuzzlePiece],
    num_missing: int,
    canvas_size: float,
    scatter: ScatterStrategy = "tray_grid",
    seed: Optional[int] = None,
) -> List[PuzzlePiece]:
    """Set the starting position and placement of every piece.

    Pieces are updated in place. The choice of displaced pieces does not
    depend on the scatter strategy.

    Args:
        pieces: Pieces in generation order.
        num_missing: Number of pieces to take off the board.
        canvas_size: Side length of the board in pixels.
        scatter: "tray_grid", "tray_random" or "board_random".
        seed: Random seed for the random strategies.

    Returns:
        The same pieces, as a list.

    Raises:
        ValueError: If the strategy is unknown or ``num_missing`` is out of range.
    """
    if scatter not in SCATTER_STRATEGIES:
        raise ValueError(f"Unknown scatter strategy: {scatter!r}")

    missing = select_missing_indices(len(pieces), num_missing)
    slots = {index: slot for slot, index in enumerate(missing)}
    rng = random.Random(seed)

    for index, piece in enumerate(pieces):
        slot = slots.get(index)
        if slot is None:
            piece.place()
            continue
        x, y = _scatter_position(slot, canvas_size, scatter, rng)
        piece.move_to(x, y)

    logger.debug(
        "Displaced %d of %d pieces starting at index %d (%s)",
        num_missing,
        len(pieces),
        missing[0] if missing else -1,
        scatter,
    )
    return list(pieces)
