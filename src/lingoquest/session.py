import logging
import random
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Set

from .errors import EngineNotReadyError
from .models import VocabularyEntry
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)


class PoolState(str, Enum):
    EMPTY = "empty"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    EXHAUSTED = "exhausted"


class SessionPool:
    """Shuffled working set of entries for one play session.

    The pool is rebuilt by ``reset_session()`` from every entry whose id is not
    in the answered set. Marking an entry answered never reorders the current
    pool; the cursor simply steps over it.
    """

    def __init__(self, store: VocabularyStore, rng: Optional[Any] = None):
        self.store = store
        self.rng = rng if rng is not None else random.Random()
        self._pool: List[VocabularyEntry] = []
        self._cursor = -1
        self._answered: Set[str] = set()
        self._built_version: Optional[int] = None

    # --- state ---
    @property
    def state(self) -> PoolState:
        if not self.store.is_loaded:
            return PoolState.EMPTY
        if self._built_version != self.store.version or self._cursor < 0:
            return PoolState.READY
        if self._cursor < len(self._pool):
            return PoolState.IN_PROGRESS
        return PoolState.EXHAUSTED

    @property
    def total(self) -> int:
        return len(self._pool)

    @property
    def remaining(self) -> int:
        return sum(
            1 for entry in self._pool[self._cursor + 1 :] if entry.id not in self._answered
        )

    @property
    def answered(self) -> FrozenSet[str]:
        return frozenset(self._answered)

    def is_answered(self, entry_id: Any) -> bool:
        return str(entry_id) in self._answered

    # --- operations ---
    def reset_session(self) -> None:
        if not self.store.is_loaded:
            raise EngineNotReadyError("Vocabulary has not been loaded.")
        self._pool = [e for e in self.store.get_all() if e.id not in self._answered]
        self.rng.shuffle(self._pool)
        self._cursor = -1
        self._built_version = self.store.version
        logger.info(
            f"Initialized session with {len(self._pool)} vocabulary entries "
            f"({len(self._answered)} excluded as answered)."
        )

    def advance(self) -> Optional[VocabularyEntry]:
        """Step to the next unanswered entry, or return None past the end."""
        if self._built_version is None or self._built_version != self.store.version:
            self.reset_session()

        while self._cursor < len(self._pool):
            self._cursor += 1
            if self._cursor >= len(self._pool):
                break
            entry = self._pool[self._cursor]
            if entry.id not in self._answered:
                return entry
            logger.debug(f"Skipping already answered entry {entry.id}")
        return None

    def mark_answered(self, entry_id: Any) -> None:
        self._answered.add(str(entry_id))
        logger.debug(f"Marked entry as answered: {entry_id}")

    def clear_answered(self) -> None:
        if not self.store.is_loaded:
            raise EngineNotReadyError("Cannot clear answers before vocabulary is loaded.")
        self._answered.clear()
        logger.info("Answered entries cleared.")
