"""Animated solve of a puzzle.

The animation is a pure step function of the elapsed time: the caller
decides when to call :meth:`SolveAnimation.advance` (frame callback, timer
or a test clock). Late calls do not slow it down; progress only depends on
elapsed time.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .models import PuzzlePiece

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 1.5
# Pause after the pieces arrive before the puzzle counts as solved
DEFAULT_SETTLE_DELAY = 0.5


def ease_in_out_quad(progress: float) -> float:
    """Symmetric quadratic ease-in-ease-out on [0, 1]."""
    if progress < 0.5:
        return 2 * progress * progress
    return 1 - (-2 * progress + 2) ** 2 / 2


@dataclass(frozen=True)
class AnimationFrame:
    """Result of one animation step.

    Attributes:
        progress: Linear progress clamped to [0, 1].
        eased: Eased progress used for interpolation.
        done: Every piece is on its anchor.
        settled: The settle delay after completion has passed.
    """

    progress: float
    eased: float
    done: bool
    settled: bool


class SolveAnimation:
    """Move every piece from where it is to its anchor."""

    def __init__(
        self,
        pieces: Sequence[PuzzlePiece],
        duration: float = DEFAULT_DURATION,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ):
        """Capture the start positions.

        Args:
            pieces: Pieces to animate; they are updated in place.
            duration: Length of the motion in seconds.
            settle_delay: Seconds to wait after the motion before settling.
        """
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        if settle_delay < 0:
            raise ValueError(f"settle_delay must not be negative, got {settle_delay}")

        self.pieces: List[PuzzlePiece] = list(pieces)
        self.duration = duration
        self.settle_delay = settle_delay
        self.start_positions: Dict[str, Tuple[float, float]] = {
            piece.id: (piece.current_x, piece.current_y) for piece in self.pieces
        }
        self.progress = 0.0

    @property
    def done(self) -> bool:
        return self.progress >= 1.0

    def advance(self, elapsed: float) -> AnimationFrame:
        """Position every piece for the given elapsed time.

        Args:
            elapsed: Seconds since the animation started.

        Returns:
            The frame that was applied.
        """
        progress = min(max(elapsed / self.duration, 0.0), 1.0)
        eased = ease_in_out_quad(progress)
        done = progress == 1.0

        for piece in self.pieces:
            if done:
                piece.place()
                continue
            start_x, start_y = self.start_positions[piece.id]
            piece.current_x = start_x + (piece.correct_x - start_x) * eased
            piece.current_y = start_y + (piece.correct_y - start_y) * eased
            piece.is_placed = False

        if done and not self.done:
            logger.debug("Solve animation reached its end after %.3fs", elapsed)
        self.progress = progress

        settled = done and elapsed >= self.duration + self.settle_delay
        return AnimationFrame(progress=progress, eased=eased, done=done, settled=settled)
