"""Data models for puzzle-related operations."""

from typing import List, Optional

from pydantic import BaseModel, Field

from einstein_puzzle import PuzzlePiece, PuzzleSession, ScatterStrategy, TilingMode


class Position(BaseModel):
    """Model representing a position in 2D space."""

    x: float
    y: float


class PuzzleResponse(BaseModel):
    """Response model for puzzle upload."""

    puzzle_id: str
    image_url: Optional[str] = None


class CreateSessionRequest(BaseModel):
    """Request model for starting a puzzle session."""

    mode: TilingMode = Field(default="hat", description="Tiling mode: 'hat' or 'grid'")
    num_missing: Optional[int] = Field(default=None, ge=1, description="Number of pieces taken off the board")
    scatter: ScatterStrategy = Field(default="tray_grid", description="Where the missing pieces start")
    seed: Optional[int] = Field(default=None, description="Seed for the random scatter strategies")
    puzzle_id: Optional[str] = Field(default=None, description="Uploaded image to play with")


class ResetSessionRequest(BaseModel):
    """Request model for restarting a session with optional new parameters."""

    mode: Optional[TilingMode] = None
    num_missing: Optional[int] = Field(default=None, ge=1)
    scatter: Optional[ScatterStrategy] = None
    seed: Optional[int] = None


class PointerDownRequest(BaseModel):
    """Pointer pressed on a piece."""

    piece_id: str
    x: float
    y: float


class PointerMoveRequest(BaseModel):
    """Pointer moved to a board position."""

    x: float
    y: float


class PieceState(BaseModel):
    """Live state of a single piece."""

    id: str
    points: List[Position]
    correct: Position
    current: Position
    rotation: float
    is_placed: bool

    @classmethod
    def from_piece(cls, piece: PuzzlePiece) -> "PieceState":
        """Build from a core piece."""
        return cls(
            id=piece.id,
            points=[Position(x=p.x, y=p.y) for p in piece.polygon.points],
            correct=Position(x=piece.correct_x, y=piece.correct_y),
            current=Position(x=piece.current_x, y=piece.current_y),
            rotation=piece.rotation,
            is_placed=piece.is_placed,
        )


class SessionStateResponse(BaseModel):
    """Response model for the state of a session."""

    session_id: str
    mode: TilingMode
    scatter: ScatterStrategy
    num_missing: int
    seed: Optional[int] = None
    canvas_size: float
    image_url: str
    solved: bool
    animating: bool
    dragging_piece_id: Optional[str] = None
    render_order: List[str]
    pieces: List[PieceState]

    @classmethod
    def from_session(cls, session_id: str, session: PuzzleSession) -> "SessionStateResponse":
        """Build from a core session."""
        board = session.board
        return cls(
            session_id=session_id,
            mode=session.mode,
            scatter=session.scatter,
            num_missing=session.num_missing,
            seed=session.seed,
            canvas_size=session.config.canvas_size,
            image_url=session.config.image_url,
            solved=session.solved,
            animating=session.animating,
            dragging_piece_id=board.dragging_piece_id,
            render_order=list(board.render_order),
            pieces=[PieceState.from_piece(piece) for piece in board.pieces],
        )


class FormulaResponse(BaseModel):
    """Values behind the placement of a hat-mode piece."""

    piece_id: str
    row: int
    col: int
    variant: int
    angle_offset: float = Field(..., description="Angular phase in radians")
    phi: float
    inv_phi: float
    fraction: float = Field(..., description="(row * phi + col / phi) mod 1")
    fib_offset: float = Field(..., description="Fraction scaled to pixels")
    center_x: float
    center_y: float
