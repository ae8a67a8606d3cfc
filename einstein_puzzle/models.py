"""Data models for tiled puzzle pieces."""

from dataclasses import asdict, dataclass
from typing import Any, List, Literal, Optional, Tuple

import numpy as np

TilingMode = Literal["hat", "grid"]
ScatterStrategy = Literal["tray_grid", "tray_random", "board_random"]

TILING_MODES: Tuple[str, ...] = ("hat", "grid")
SCATTER_STRATEGIES: Tuple[str, ...] = ("tray_grid", "tray_random", "board_random")


@dataclass(frozen=True)
class Point:
    """A planar coordinate in canvas pixels."""

    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        """Return the point as an (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True)
class PolygonMetadata:
    """Values used to build a hat-mode polygon.

    Attributes:
        row: Grid row of the generating cell.
        col: Grid column of the generating cell.
        variant: Angular phase of the hexagon (0, 1 or 2).
        fib_offset: Golden-ratio positional perturbation in pixels.
        center_x: X coordinate of the hexagon centre.
        center_y: Y coordinate of the hexagon centre.
    """

    row: int
    col: int
    variant: int
    fib_offset: float
    center_x: float
    center_y: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonMetadata":
        """Create from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class Polygon:
    """A closed contour of at least three points.

    The first and last points are implicitly connected. Hat-mode polygons
    carry the metadata they were generated from.
    """

    points: Tuple[Point, ...]
    metadata: Optional[PolygonMetadata] = None

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise ValueError(f"A polygon needs at least 3 points, got {len(self.points)}")
        # Accept any sequence of points but store an immutable tuple
        object.__setattr__(self, "points", tuple(self.points))

    def as_array(self) -> np.ndarray:
        """Return the vertices as an (N, 2) float array."""
        return np.array([p.to_tuple() for p in self.points], dtype=float)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "points": [{"x": p.x, "y": p.y} for p in self.points],
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Create from dictionary."""
        metadata = data.get("metadata")
        return cls(
            points=tuple(Point(p["x"], p["y"]) for p in data["points"]),
            metadata=PolygonMetadata.from_dict(metadata) if metadata else None,
        )


@dataclass
class PuzzlePiece:
    """A movable puzzle piece.

    The polygon stays in canvas-absolute coordinates; movement is the
    offset between the current and the correct position.

    Attributes:
        id: Stable identifier, "piece-<index>" in generation order.
        polygon: Contour of the piece as generated.
        correct_x: X of the target anchor (vertex mean of the polygon).
        correct_y: Y of the target anchor.
        current_x: Live X position.
        current_y: Live Y position.
        rotation: Reserved, always 0.
        is_placed: True when the piece sits on its anchor.
    """

    id: str
    polygon: Polygon
    correct_x: float
    correct_y: float
    current_x: float = 0.0
    current_y: float = 0.0
    rotation: float = 0.0
    is_placed: bool = False

    @property
    def formula(self) -> Optional[PolygonMetadata]:
        """Generation metadata of the piece's polygon, if any."""
        return self.polygon.metadata

    @property
    def offset(self) -> Tuple[float, float]:
        """Translation to apply to the polygon when rendering."""
        return (self.current_x - self.correct_x, self.current_y - self.correct_y)

    def distance_to_target(self) -> float:
        """Euclidean distance between the current and the correct position."""
        return float(np.hypot(self.current_x - self.correct_x, self.current_y - self.correct_y))

    def move_to(self, x: float, y: float) -> None:
        """Move the piece; a moved piece is never considered placed."""
        self.current_x = x
        self.current_y = y
        self.is_placed = False

    def place(self) -> None:
        """Put the piece exactly on its anchor."""
        self.current_x = self.correct_x
        self.current_y = self.correct_y
        self.is_placed = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "polygon": self.polygon.to_dict(),
            "correct_x": self.correct_x,
            "correct_y": self.correct_y,
            "current_x": self.current_x,
            "current_y": self.current_y,
            "rotation": self.rotation,
            "is_placed": self.is_placed,
        }


@dataclass(frozen=True)
class PuzzleConfig:
    """Immutable parameters of a play session.

    Attributes:
        image_url: Reference to the picture being reconstructed.
        canvas_size: Side length of the square board in pixels.
        grid_rows: Row count for grid mode.
        grid_cols: Column count for grid mode.
        snap_threshold: Largest release distance (exclusive) that still snaps.
        hat_complexity: Cells per side for hat mode.
    """

    image_url: str = ""
    canvas_size: float = 600.0
    grid_rows: int = 4
    grid_cols: int = 4
    snap_threshold: float = 30.0
    hat_complexity: int = 6

    def __post_init__(self) -> None:
        if self.canvas_size <= 0:
            raise ValueError(f"canvas_size must be positive, got {self.canvas_size}")
        if self.grid_rows <= 0 or self.grid_cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.grid_rows}x{self.grid_cols}")
        if self.snap_threshold <= 0:
            raise ValueError(f"snap_threshold must be positive, got {self.snap_threshold}")
        if self.hat_complexity <= 0:
            raise ValueError(f"hat_complexity must be positive, got {self.hat_complexity}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def polygon_from_tuples(points: List[Tuple[float, float]]) -> Polygon:
    """Build a metadata-free polygon from (x, y) tuples."""
    return Polygon(points=tuple(Point(float(x), float(y)) for x, y in points))
