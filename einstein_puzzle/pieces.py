"""Turn polygons into puzzle pieces."""

from typing import List, Sequence, Tuple

from .models import Polygon, PuzzlePiece


def calculate_centroid(polygon: Polygon) -> Tuple[float, float]:
    """Arithmetic mean of the polygon's vertices.

    This is the vertex mean, not the area centroid; the snap anchor of a
    piece is defined by it.
    """
    center = polygon.as_array().mean(axis=0)
    return (float(center[0]), float(center[1]))


def piece_id(index: int) -> str:
    """Identifier of the piece at a generation index."""
    return f"piece-{index}"


def create_puzzle_pieces(polygons: Sequence[Polygon]) -> List[PuzzlePiece]:
    """Build one unplaced piece per polygon, anchored on its vertex mean.

    The current position starts at the origin; the layout step always
    overwrites it.
    """
    pieces: List[PuzzlePiece] = []
    for index, polygon in enumerate(polygons):
        correct_x, correct_y = calculate_centroid(polygon)
        pieces.append(
            PuzzlePiece(
                id=piece_id(index),
                polygon=polygon,
                correct_x=correct_x,
                correct_y=correct_y,
            )
        )
    return pieces
