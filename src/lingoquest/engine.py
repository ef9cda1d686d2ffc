import logging
import random
from typing import Any, Optional, Tuple

from .models import Question, VocabularyEntry
from .questions import QuestionFormatter
from .session import PoolState, SessionPool
from .tracker import AnswerTracker
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)


class QuizEngine:
    """One player's question session over a (possibly shared) vocabulary store.

    Pass ``seed`` or an ``rng`` with a ``shuffle`` method to make pool order,
    distractor sampling and option order reproducible.
    """

    def __init__(
        self,
        store: Optional[VocabularyStore] = None,
        rng: Optional[Any] = None,
        seed: Optional[Any] = None,
        strict_difficulty: bool = False,
    ):
        if rng is None:
            rng = random.Random(seed)
        self.store = store if store is not None else VocabularyStore()
        self.pool = SessionPool(self.store, rng)
        self.formatter = QuestionFormatter(
            self.store, self.pool, rng, strict_difficulty=strict_difficulty
        )
        self.tracker = AnswerTracker(self.pool)

    async def load_vocabulary(self, source: Any) -> Tuple[VocabularyEntry, ...]:
        entries = await self.store.load(source)
        self.pool.reset_session()
        return entries

    def start(self) -> None:
        """Build the pool from an already loaded store."""
        self.pool.reset_session()

    def get_next_question(self, difficulty: str, target_lang: str) -> Optional[Question]:
        return self.formatter.next_question(difficulty, target_lang)

    def record_answer(self, question_id: Any) -> None:
        self.tracker.record_answer(question_id)

    def reset_answered_questions_tracker(self) -> None:
        self.tracker.reset_answered_questions_tracker()

    def reset_session(self) -> None:
        self.pool.reset_session()

    def clear_answered(self) -> None:
        self.pool.clear_answered()

    @property
    def state(self) -> PoolState:
        return self.pool.state

    @property
    def total_questions(self) -> int:
        return self.pool.total

    @property
    def remaining_questions(self) -> int:
        return self.pool.remaining

    @property
    def answered_count(self) -> int:
        return len(self.pool.answered)
