"""In-memory registry of puzzle sessions."""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from einstein_puzzle import PuzzleConfig, PuzzleSession, ScatterStrategy, TilingMode

from app.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    """A session and the uploaded image it shows, if any."""

    session: PuzzleSession
    puzzle_id: Optional[str] = None


class SessionStore:
    """Creates, looks up and discards sessions."""

    def __init__(self, app_settings: Optional[Settings] = None, clock: Callable[[], float] = time.monotonic):
        """Initialize the store.

        Args:
            app_settings: Settings used for new sessions.
            clock: Monotonic time source handed to every new session.
        """
        self.settings = app_settings or settings
        self.clock = clock
        self._entries: Dict[str, SessionEntry] = {}

    def create(
        self,
        mode: TilingMode = "hat",
        num_missing: Optional[int] = None,
        scatter: ScatterStrategy = "tray_grid",
        seed: Optional[int] = None,
        puzzle_id: Optional[str] = None,
        image_url: str = "",
    ) -> str:
        """Start a session and return its id."""
        config: PuzzleConfig = self.settings.puzzle_config(image_url)
        session = PuzzleSession(
            config,
            mode=mode,
            num_missing=num_missing if num_missing is not None else self.settings.DEFAULT_MISSING_PIECES,
            scatter=scatter,
            seed=seed,
            solve_duration=self.settings.SOLVE_DURATION,
            settle_delay=self.settings.SETTLE_DELAY,
            clock=self.clock,
        )
        session_id = str(uuid.uuid4())
        self._entries[session_id] = SessionEntry(session=session, puzzle_id=puzzle_id)
        logger.info("Created session %s", session_id)
        return session_id

    def get(self, session_id: str) -> Optional[SessionEntry]:
        """Look up a session entry."""
        return self._entries.get(session_id)

    def delete(self, session_id: str) -> bool:
        """Discard a session. Returns False if it did not exist."""
        if self._entries.pop(session_id, None) is None:
            return False
        logger.info("Deleted session %s", session_id)
        return True

    def __len__(self) -> int:
        return len(self._entries)


# Singleton instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get the singleton SessionStore instance."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
