from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

from .engine import QuizEngine
from .vocabulary import VocabularyStore


@dataclass
class ActiveSession:
    engine: QuizEngine
    created_at: datetime = field(default_factory=datetime.now)


vocab_store = VocabularyStore()
sessions: Dict[str, ActiveSession] = {}
