"""Drag-and-snap interaction over a collection of puzzle pieces.

The board is either idle or dragging exactly one piece. Pointer events move
it between the two states:

- pointer down on an unplaced piece: start dragging and bring it to front
- pointer move: follow the pointer, keeping the grab offset
- pointer up / leave: snap onto the anchor when closer than the threshold

Whether the puzzle is solved is derived from the pieces on every read.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .models import PuzzlePiece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No piece is being dragged."""


@dataclass(frozen=True)
class Dragging:
    """A piece follows the pointer.

    Attributes:
        piece_id: Identifier of the dragged piece.
        offset_x: Pointer X minus piece X at pick-up.
        offset_y: Pointer Y minus piece Y at pick-up.
    """

    piece_id: str
    offset_x: float
    offset_y: float


DragState = Union[Idle, Dragging]

IDLE = Idle()


class PuzzleBoard:
    """Live piece collection and its drag state machine."""

    def __init__(self, pieces: Sequence[PuzzlePiece], snap_threshold: float):
        """Initialize the board.

        Args:
            pieces: Pieces in generation order, already laid out.
            snap_threshold: Release distance below which a piece snaps.

        Raises:
            ValueError: If piece ids repeat or the threshold is not positive.
        """
        if snap_threshold <= 0:
            raise ValueError(f"snap_threshold must be positive, got {snap_threshold}")

        self._pieces: Dict[str, PuzzlePiece] = {}
        for piece in pieces:
            if piece.id in self._pieces:
                raise ValueError(f"Duplicate piece id: {piece.id}")
            self._pieces[piece.id] = piece

        self.snap_threshold = snap_threshold
        # Back to front; the last id is drawn on top
        self.render_order: List[str] = list(self._pieces)
        self.state: DragState = IDLE

    @property
    def pieces(self) -> List[PuzzlePiece]:
        """Pieces in generation order."""
        return list(self._pieces.values())

    @property
    def is_solved(self) -> bool:
        """True when every piece sits on its anchor."""
        return bool(self._pieces) and all(piece.is_placed for piece in self._pieces.values())

    @property
    def dragging_piece_id(self) -> Optional[str]:
        """Id of the piece being dragged, if any."""
        state = self.state
        return state.piece_id if isinstance(state, Dragging) else None

    def get_piece(self, piece_id: str) -> Optional[PuzzlePiece]:
        """Look up a piece by id."""
        return self._pieces.get(piece_id)

    def pieces_in_render_order(self) -> List[PuzzlePiece]:
        """Pieces from back to front."""
        return [self._pieces[piece_id] for piece_id in self.render_order]

    def bring_to_front(self, piece_id: str) -> None:
        """Move a piece to the end of the render order."""
        self.render_order.remove(piece_id)
        self.render_order.append(piece_id)

    def pointer_down(self, piece_id: str, x: float, y: float) -> bool:
        """Start dragging a piece.

        Args:
            piece_id: Piece under the pointer.
            x: Pointer X.
            y: Pointer Y.

        Returns:
            True if a drag started.
        """
        state = self.state
        if isinstance(state, Dragging):
            logger.debug("Ignoring pointer down on %s: already dragging %s", piece_id, state.piece_id)
            return False

        piece = self._pieces.get(piece_id)
        if piece is None:
            logger.debug("Ignoring pointer down on unknown piece %s", piece_id)
            return False
        if piece.is_placed:
            # Placed pieces are locked, which also covers the solved puzzle
            logger.debug("Ignoring pointer down on placed piece %s", piece_id)
            return False

        self.state = Dragging(piece_id, x - piece.current_x, y - piece.current_y)
        self.bring_to_front(piece_id)
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        """Move the dragged piece with the pointer.

        Returns:
            True if a piece moved.
        """
        state = self.state
        if not isinstance(state, Dragging):
            return False

        piece = self._pieces.get(state.piece_id)
        if piece is None:
            self.state = IDLE
            return False

        piece.move_to(x - state.offset_x, y - state.offset_y)
        return True

    def pointer_up(self) -> bool:
        """Release the dragged piece.

        Returns:
            True if the piece snapped onto its anchor.
        """
        state = self.state
        if not isinstance(state, Dragging):
            return False

        piece = self._pieces.get(state.piece_id)
        self.state = IDLE
        if piece is None:
            return False

        distance = piece.distance_to_target()
        if distance < self.snap_threshold:
            piece.place()
            logger.info("Placed %s (distance %.1f)", piece.id, distance)
            if self.is_solved:
                logger.info("Puzzle solved")
            return True

        return False

    def pointer_leave(self) -> bool:
        """Pointer left the board; same as a release."""
        return self.pointer_up()

    def cancel_drag(self) -> None:
        """Abandon the current drag without snapping."""
        state = self.state
        if isinstance(state, Dragging):
            logger.debug("Abandoning drag of %s", state.piece_id)
        self.state = IDLE
