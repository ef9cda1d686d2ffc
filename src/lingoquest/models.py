from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DIFFICULTY_TIERS = ("easy", "medium", "hard")


class VocabularyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    english: str
    translations: Dict[str, str]
    difficulty: Optional[str] = None
    category: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None or str(value).strip() == "":
            raise ValueError("entry id is required")
        return str(value).strip()

    @field_validator("english")
    @classmethod
    def _strip_english(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("english headword is empty")
        return value

    @field_validator("translations", mode="before")
    @classmethod
    def _clean_translations(cls, value: Any) -> Dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("translations must be a mapping")
        cleaned = {}
        for code, word in value.items():
            if word is None:
                continue
            word = str(word).strip()
            if word:
                cleaned[str(code).strip().lower()] = word
        return cleaned

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip().lower()
        return value if value in DIFFICULTY_TIERS else None

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @model_validator(mode="after")
    def _ensure_english_translation(self) -> "VocabularyEntry":
        if "en" not in self.translations:
            self.translations["en"] = self.english
        return self

    def translation(self, lang: str) -> Optional[str]:
        return self.translations.get(lang)


class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    clue: str
    options: List[str]
    correct_answer: str = Field(alias="correctAnswer")


# --- API payloads ---
class VocabularySummary(BaseModel):
    loaded: bool
    total_entries: int
    languages: List[str]
    supported_languages: List[str]
    difficulties: Dict[str, int]


class SessionStatus(BaseModel):
    state: str
    total_questions: int
    remaining_questions: int
    answered_count: int


class QuestionResponse(BaseModel):
    question: Optional[Question]
    complete: bool
    remaining_questions: int


class AnswerReceipt(BaseModel):
    question_id: str
    answered_count: int
    remaining_questions: int


class EventRecord(BaseModel):
    id: int
    timestamp: str
    level: str
    logger: str
    message: str
