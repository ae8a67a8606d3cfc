"""Polygon layouts over a square canvas.

Two tilings are provided:

- grid: ``rows x cols`` axis-aligned rectangles that exactly tile the canvas.
- hat: a quasi-periodic approximation inspired by the Hat monotile. Each cell
  of a ``complexity x complexity`` grid gets a perturbed hexagon whose centre
  is shifted by a golden-ratio offset. Neighbouring hexagons may overlap or
  leave slivers; the layout is a visual approximation, not a tessellation.

Both generators are deterministic and emit polygons in row-major order.
"""

import logging
import math
from typing import Any, Dict, List

import numpy as np

from .models import TILING_MODES, Point, Polygon, PolygonMetadata, TilingMode

logger = logging.getLogger(__name__)

# Golden ratio for the quasi-periodic offsets
PHI = (1 + math.sqrt(5)) / 2
INV_PHI = 1 / PHI

HAT_SIDES = 6
# Hexagon radius relative to the cell size
HAT_RADIUS_RATIO = 0.45
# Radius boost for the vertices whose index matches the variant ("notch")
HAT_NOTCH_BOOST = 0.2
# Largest golden-ratio offset relative to the cell size
FIB_OFFSET_SCALE = 0.3
# The vertical shift is a fraction of the horizontal one
FIB_OFFSET_Y_RATIO = 0.7

DEFAULT_HAT_COMPLEXITY = 8

# Attribution for the monotile the hat mode imitates
HAT_INFO: Dict[str, Any] = {
    "discoverers": ["David Smith", "Joseph Samuel Myers", "Craig S. Kaplan", "Chaim Goodman-Strauss"],
    "year": 2023,
    "paper": "An aperiodic monotile",
    "source": "https://github.com/isohedral/hatviz",
}


def generate_grid_polygons(canvas_size: float, rows: int, cols: int) -> List[Polygon]:
    """Partition the canvas into equal rectangles.

    Args:
        canvas_size: Side length of the square canvas in pixels.
        rows: Number of rows.
        cols: Number of columns.

    Returns:
        ``rows * cols`` four-point polygons in row-major order, corners listed
        clockwise from the top-left.
    """
    piece_width = canvas_size / cols
    piece_height = canvas_size / rows

    polygons: List[Polygon] = []
    for row in range(rows):
        for col in range(cols):
            x = col * piece_width
            y = row * piece_height
            polygons.append(
                Polygon(
                    points=(
                        Point(x, y),
                        Point(x + piece_width, y),
                        Point(x + piece_width, y + piece_height),
                        Point(x, y + piece_height),
                    )
                )
            )
    return polygons


def fibonacci_offset(row: int, col: int, cell_size: float) -> float:
    """Golden-ratio perturbation of the cell at (row, col), in pixels."""
    return ((row * PHI + col * INV_PHI) % 1) * cell_size * FIB_OFFSET_SCALE


def create_hat_like_polygon(center_x: float, center_y: float, size: float, variant: int) -> List[Point]:
    """Build the six vertices of a perturbed hexagon.

    Vertex ``i`` sits at angle ``i * 60deg + variant * 30deg``. Its radius is
    ``size``, boosted by 20% when ``i % 3 == variant``.

    Args:
        center_x: X coordinate of the centre.
        center_y: Y coordinate of the centre.
        size: Base radius.
        variant: Angular phase (0, 1 or 2).

    Returns:
        The six vertices in angular order.
    """
    indices = np.arange(HAT_SIDES)
    angles = indices * (2 * np.pi / HAT_SIDES) + variant * (np.pi / 6)
    radii = size * np.where(indices % 3 == variant, 1 + HAT_NOTCH_BOOST, 1.0)

    xs = center_x + radii * np.cos(angles)
    ys = center_y + radii * np.sin(angles)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def generate_hat_tiling(canvas_size: float, complexity: int = DEFAULT_HAT_COMPLEXITY) -> List[Polygon]:
    """Generate the quasi-periodic hexagon layout.

    Args:
        canvas_size: Side length of the square canvas in pixels.
        complexity: Number of cells per side.

    Returns:
        ``complexity ** 2`` hexagons in row-major order, each carrying the
        metadata it was built from.
    """
    cell_size = canvas_size / complexity
    polygons: List[Polygon] = []

    for row in range(complexity):
        for col in range(complexity):
            fib_offset = fibonacci_offset(row, col, cell_size)
            center_x = col * cell_size + cell_size / 2 + fib_offset
            center_y = row * cell_size + cell_size / 2 + fib_offset * FIB_OFFSET_Y_RATIO
            variant = (row + col) % 3

            points = create_hat_like_polygon(center_x, center_y, cell_size * HAT_RADIUS_RATIO, variant)
            metadata = PolygonMetadata(
                row=row,
                col=col,
                variant=variant,
                fib_offset=fib_offset,
                center_x=center_x,
                center_y=center_y,
            )
            polygons.append(Polygon(points=tuple(points), metadata=metadata))

    return polygons


def generate_polygons(
    canvas_size: float,
    mode: TilingMode,
    rows: int = 4,
    cols: int = 4,
    complexity: int = DEFAULT_HAT_COMPLEXITY,
) -> List[Polygon]:
    """Generate the polygons for a tiling mode.

    Args:
        canvas_size: Side length of the square canvas in pixels.
        mode: "grid" or "hat".
        rows: Row count, used by grid mode only.
        cols: Column count, used by grid mode only.
        complexity: Cells per side, used by hat mode only.

    Returns:
        The polygons in generation order.

    Raises:
        ValueError: If the mode is unknown or a dimension is not positive.
    """
    if mode not in TILING_MODES:
        raise ValueError(f"Unknown tiling mode: {mode!r}")
    if canvas_size <= 0:
        raise ValueError(f"canvas_size must be positive, got {canvas_size}")

    if mode == "grid":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        polygons = generate_grid_polygons(canvas_size, rows, cols)
    else:
        if complexity <= 0:
            raise ValueError(f"complexity must be positive, got {complexity}")
        polygons = generate_hat_tiling(canvas_size, complexity)

    logger.debug("Generated %d %s polygons for canvas %s", len(polygons), mode, canvas_size)
    return polygons


def explain_formula(metadata: PolygonMetadata) -> Dict[str, Any]:
    """Break a hat polygon's placement down into the values of its formula.

    Returns:
        Dictionary with the cell position, variant, phi, 1/phi, the
        fractional part ``(row * phi + col / phi) mod 1``, the scaled offset
        and the centre.
    """
    fraction = (metadata.row * PHI + metadata.col * INV_PHI) % 1
    return {
        "row": metadata.row,
        "col": metadata.col,
        "variant": metadata.variant,
        "angle_offset": metadata.variant * (math.pi / 6),
        "phi": PHI,
        "inv_phi": INV_PHI,
        "fraction": fraction,
        "fib_offset": metadata.fib_offset,
        "center_x": metadata.center_x,
        "center_y": metadata.center_y,
    }
