import logging
import random
import warnings
from typing import Any, List, Optional

from .errors import InvalidLanguage, MissingTranslation
from .models import DIFFICULTY_TIERS, Question, VocabularyEntry
from .session import SessionPool
from .vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

DIFFICULTY_CHOICES = {"easy": 2, "medium": 3, "hard": 4}
DEFAULT_CHOICES = DIFFICULTY_CHOICES["easy"]
MIN_OPTIONS = 2

SUPPORTED_LANGUAGES = ("en", "fr", "de")
FALLBACK_LANGUAGE = "en"
LANGUAGE_NAMES = {"en": "English", "fr": "French", "de": "German"}

PLACEHOLDER_OPTION = "(other)"


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)


def resolve_language(code: Optional[str]) -> str:
    """Return ``code`` when supported, otherwise warn and fall back to English."""
    if code in SUPPORTED_LANGUAGES:
        return code
    message = f"Invalid target answer language: {code!r}. Defaulting to '{FALLBACK_LANGUAGE}'."
    logger.warning(message)
    warnings.warn(message, InvalidLanguage, stacklevel=3)
    return FALLBACK_LANGUAGE


def choices_for(difficulty: Optional[str]) -> int:
    return DIFFICULTY_CHOICES.get(difficulty, DEFAULT_CHOICES)


def placeholders(count: int, taken: List[str]) -> List[str]:
    """Build ``count`` distinct filler options that collide with nothing in ``taken``."""
    result: List[str] = []
    n = 1
    while len(result) < count:
        label = PLACEHOLDER_OPTION if n == 1 else f"(other {n})"
        n += 1
        if label not in taken:
            result.append(label)
    return result


class QuestionFormatter:
    """Turns pool entries into multiple-choice questions.

    Distractors are the target-language translations of other vocabulary
    entries; when there are not enough of them the option list is padded
    with placeholder labels.
    """

    def __init__(
        self,
        store: VocabularyStore,
        pool: SessionPool,
        rng: Optional[Any] = None,
        strict_difficulty: bool = False,
    ):
        self.store = store
        self.pool = pool
        self.rng = rng if rng is not None else random.Random()
        self.strict_difficulty = strict_difficulty

    def next_question(self, difficulty: str, target_lang: str) -> Optional[Question]:
        target_lang = resolve_language(target_lang)
        logger.debug(
            f"Attempting to get next question. Difficulty: {difficulty}, Language: {target_lang}"
        )

        entry = self.pool.advance()
        while entry is not None and not self._is_eligible(entry, difficulty, target_lang):
            entry = self.pool.advance()

        if entry is None:
            logger.info("No more questions available in this session.")
            return None

        question = self.format(entry, difficulty, target_lang)
        logger.debug(f"Selected and formatted question ID: {question.id}")
        return question

    def format(self, entry: VocabularyEntry, difficulty: str, target_lang: str) -> Question:
        correct_answer = entry.translations[target_lang]
        num_choices = max(choices_for(difficulty), MIN_OPTIONS)

        distractors = self._pick_distractors(entry, correct_answer, target_lang, num_choices - 1)
        if len(distractors) < num_choices - 1:
            missing = num_choices - 1 - len(distractors)
            logger.warning(
                f"Only {len(distractors)} distractors available for entry {entry.id}; "
                f"padding with {missing} placeholder option(s)."
            )
            distractors += placeholders(missing, [correct_answer] + distractors)

        options = [correct_answer] + distractors
        self.rng.shuffle(options)

        clue = f"What is '{entry.english}' in {language_name(target_lang)}?"
        return Question(id=entry.id, clue=clue, options=options, correct_answer=correct_answer)

    def _pick_distractors(
        self, entry: VocabularyEntry, correct_answer: str, target_lang: str, count: int
    ) -> List[str]:
        candidates: List[str] = []
        for other in self.store.get_all():
            if other.id == entry.id:
                continue
            word = other.translation(target_lang)
            if word and word != correct_answer and word not in candidates:
                candidates.append(word)
        self.rng.shuffle(candidates)
        return candidates[:count]

    def _is_eligible(self, entry: VocabularyEntry, difficulty: str, target_lang: str) -> bool:
        if entry.translation(target_lang) is None:
            message = f"Entry {entry.id} has no '{target_lang}' translation; skipping."
            logger.warning(message)
            warnings.warn(message, MissingTranslation, stacklevel=4)
            return False
        if (
            self.strict_difficulty
            and difficulty in DIFFICULTY_TIERS
            and entry.difficulty is not None
            and entry.difficulty != difficulty
        ):
            logger.debug(f"Entry {entry.id} is tagged {entry.difficulty}; skipping.")
            return False
        return True
