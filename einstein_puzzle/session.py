"""A play session: the generation pipeline plus the live board."""

import logging
import time
from typing import Callable, Optional, Union

from .animation import DEFAULT_DURATION, DEFAULT_SETTLE_DELAY, AnimationFrame, SolveAnimation
from .interaction import PuzzleBoard
from .layout import layout_pieces
from .models import PuzzleConfig, ScatterStrategy, TilingMode
from .pieces import create_puzzle_pieces
from .tiling import generate_polygons

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Default for reset(seed=...): keep the current seed
_KEEP_SEED = object()


class PuzzleSession:
    """Owns the pieces of one puzzle and arbitrates drags and the solve animation.

    While the solve animation runs, pointer events are ignored. Starting a
    solve abandons any drag in progress.
    """

    def __init__(
        self,
        config: PuzzleConfig,
        mode: TilingMode = "hat",
        num_missing: int = 5,
        scatter: ScatterStrategy = "tray_grid",
        seed: Optional[int] = None,
        solve_duration: float = DEFAULT_DURATION,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        clock: Clock = time.monotonic,
    ):
        """Build the pieces and lay them out.

        Args:
            config: Board parameters.
            mode: Tiling mode, "hat" or "grid".
            num_missing: Pieces to take off the board; clamped to the piece count.
            scatter: Where the displaced pieces start.
            seed: Seed for the random scatter strategies.
            solve_duration: Seconds the solve animation takes.
            settle_delay: Seconds between the end of the animation and solved.
            clock: Monotonic time source in seconds.
        """
        self.config = config
        self.solve_duration = solve_duration
        self.settle_delay = settle_delay
        self.clock = clock

        self.mode: TilingMode = mode
        self.requested_missing = num_missing
        self.num_missing = num_missing
        self.scatter: ScatterStrategy = scatter
        self.seed = seed

        self._animation: Optional[SolveAnimation] = None
        self._animation_started = 0.0
        self.board = self._build_board()

    def _build_board(self) -> PuzzleBoard:
        polygons = generate_polygons(
            self.config.canvas_size,
            self.mode,
            rows=self.config.grid_rows,
            cols=self.config.grid_cols,
            complexity=self.config.hat_complexity,
        )
        pieces = create_puzzle_pieces(polygons)

        num_missing = min(max(self.requested_missing, 0), len(pieces))
        if num_missing != self.requested_missing:
            logger.info("Clamped missing pieces from %d to %d", self.requested_missing, num_missing)
        self.num_missing = num_missing

        layout_pieces(pieces, num_missing, self.config.canvas_size, scatter=self.scatter, seed=self.seed)
        logger.info("Started %s puzzle with %d pieces, %d missing", self.mode, len(pieces), num_missing)
        return PuzzleBoard(pieces, self.config.snap_threshold)

    def reset(
        self,
        mode: Optional[TilingMode] = None,
        num_missing: Optional[int] = None,
        scatter: Optional[ScatterStrategy] = None,
        seed: Union[int, None, object] = _KEEP_SEED,
    ) -> None:
        """Discard the pieces and rebuild them, optionally with new parameters.

        Omitted parameters keep their current value. Passing ``seed=None``
        switches back to unseeded random scatter.
        """
        if mode is not None:
            self.mode = mode
        if num_missing is not None:
            self.requested_missing = num_missing
        if scatter is not None:
            self.scatter = scatter
        if seed is not _KEEP_SEED:
            self.seed = seed  # type: ignore[assignment]

        self._animation = None
        self.board = self._build_board()

    @property
    def animating(self) -> bool:
        """True from the start of a solve until it has settled."""
        return self._animation is not None

    @property
    def solved(self) -> bool:
        """Every piece is placed and no solve animation is still settling."""
        return self._animation is None and self.board.is_solved

    def tick(self) -> Optional[AnimationFrame]:
        """Advance the solve animation to the current time, if one runs."""
        if self._animation is None:
            return None

        frame = self._animation.advance(self.clock() - self._animation_started)
        if frame.settled:
            self._animation = None
            logger.info("Puzzle solved by animation")
        return frame

    def solve(self) -> bool:
        """Start the solve animation.

        Returns:
            False if the puzzle is already solved or being solved.
        """
        self.tick()
        if self.animating or self.board.is_solved:
            return False

        self.board.cancel_drag()
        self._animation = SolveAnimation(self.board.pieces, self.solve_duration, self.settle_delay)
        self._animation_started = self.clock()
        logger.info("Solving puzzle over %.2fs", self.solve_duration)
        self.tick()
        return True

    def pointer_down(self, piece_id: str, x: float, y: float) -> bool:
        if self._blocked("pointer down"):
            return False
        return self.board.pointer_down(piece_id, x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        if self._blocked("pointer move"):
            return False
        return self.board.pointer_move(x, y)

    def pointer_up(self) -> bool:
        if self._blocked("pointer up"):
            return False
        return self.board.pointer_up()

    def pointer_leave(self) -> bool:
        if self._blocked("pointer leave"):
            return False
        return self.board.pointer_leave()

    def _blocked(self, event: str) -> bool:
        self.tick()
        if self.animating:
            logger.debug("Ignoring %s during solve animation", event)
            return True
        return False
