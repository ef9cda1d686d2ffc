"""Vocabulary question engine for the LingoQuest quiz game."""

from .engine import QuizEngine
from .errors import (
    EngineNotReadyError,
    InvalidLanguage,
    LingoQuestError,
    LoadError,
    MissingTranslation,
)
from .models import Question, VocabularyEntry
from .questions import QuestionFormatter, language_name
from .session import PoolState, SessionPool
from .tracker import AnswerTracker
from .vocabulary import VocabularyStore, source_for

__version__ = "0.1.0"

__all__ = [
    "AnswerTracker",
    "EngineNotReadyError",
    "InvalidLanguage",
    "LingoQuestError",
    "LoadError",
    "MissingTranslation",
    "PoolState",
    "Question",
    "QuestionFormatter",
    "QuizEngine",
    "SessionPool",
    "VocabularyEntry",
    "VocabularyStore",
    "language_name",
    "source_for",
]
