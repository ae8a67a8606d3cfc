"""Einstein puzzle - tiling and interaction engine for polygon jigsaw puzzles.

This package lays polygons over a square board (an exact grid, or a
quasi-periodic hexagon layout inspired by the Hat monotile), turns them into
pieces, takes some of them off the board and runs the drag, snap and
animated-solve logic that puts them back.
"""

from .animation import DEFAULT_DURATION, DEFAULT_SETTLE_DELAY, AnimationFrame, SolveAnimation, ease_in_out_quad
from .interaction import IDLE, Dragging, DragState, Idle, PuzzleBoard
from .layout import (
    TRAY_COLUMNS,
    TRAY_MARGIN,
    TRAY_SPACING,
    layout_pieces,
    missing_start_index,
    select_missing_indices,
    tray_bounds,
    tray_grid_position,
    tray_origin,
)
from .masking import calculate_piece_bounds, create_piece_mask, cut_piece, fit_to_canvas
from .models import (
    SCATTER_STRATEGIES,
    TILING_MODES,
    Point,
    Polygon,
    PolygonMetadata,
    PuzzleConfig,
    PuzzlePiece,
    ScatterStrategy,
    TilingMode,
    polygon_from_tuples,
)
from .pieces import calculate_centroid, create_puzzle_pieces, piece_id
from .session import PuzzleSession
from .tiling import (
    HAT_INFO,
    INV_PHI,
    PHI,
    create_hat_like_polygon,
    explain_formula,
    fibonacci_offset,
    generate_grid_polygons,
    generate_hat_tiling,
    generate_polygons,
)

__all__ = [
    # Models
    "Point",
    "Polygon",
    "PolygonMetadata",
    "PuzzlePiece",
    "PuzzleConfig",
    "TilingMode",
    "ScatterStrategy",
    "TILING_MODES",
    "SCATTER_STRATEGIES",
    "polygon_from_tuples",
    # Tiling
    "PHI",
    "INV_PHI",
    "HAT_INFO",
    "generate_grid_polygons",
    "generate_hat_tiling",
    "generate_polygons",
    "create_hat_like_polygon",
    "fibonacci_offset",
    "explain_formula",
    # Pieces
    "calculate_centroid",
    "create_puzzle_pieces",
    "piece_id",
    # Layout
    "TRAY_MARGIN",
    "TRAY_SPACING",
    "TRAY_COLUMNS",
    "layout_pieces",
    "missing_start_index",
    "select_missing_indices",
    "tray_origin",
    "tray_grid_position",
    "tray_bounds",
    # Interaction
    "Idle",
    "Dragging",
    "DragState",
    "IDLE",
    "PuzzleBoard",
    # Animation
    "DEFAULT_DURATION",
    "DEFAULT_SETTLE_DELAY",
    "AnimationFrame",
    "SolveAnimation",
    "ease_in_out_quad",
    # Session
    "PuzzleSession",
    # Image masking
    "fit_to_canvas",
    "calculate_piece_bounds",
    "create_piece_mask",
    "cut_piece",
]
