import logging
from typing import Any

from .session import SessionPool

logger = logging.getLogger(__name__)


class AnswerTracker:
    """Exclusion bookkeeping after the player responds.

    Correctness is decided by the caller, which already holds both the
    selected option and ``Question.correct_answer``.
    """

    def __init__(self, pool: SessionPool):
        self.pool = pool

    def record_answer(self, question_id: Any) -> None:
        self.pool.mark_answered(question_id)
        logger.info(f"Recorded answer for question {question_id}")

    def reset_answered_questions_tracker(self) -> None:
        """Make every entry eligible again and start a fresh shuffled round."""
        self.pool.clear_answered()
        self.pool.reset_session()
        logger.info("Answered questions tracker and session vocabulary reset.")
