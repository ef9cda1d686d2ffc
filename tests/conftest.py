import asyncio
import json
import logging
import random

import pytest

from lingoquest.engine import QuizEngine
from lingoquest.vocabulary import VocabularyStore

ANIMALS = [
    {"id": 1, "english": "cat", "translations": {"en": "cat", "fr": "chat", "de": "Katze"}},
    {"id": 2, "english": "dog", "translations": {"en": "dog", "fr": "chien", "de": "Hund"}},
    {"id": 3, "english": "bird", "translations": {"en": "bird", "fr": "oiseau", "de": "Vogel"}},
]

FOODS = [
    {"id": "w001", "english": "apple", "translations": {"en": "apple", "fr": "pomme", "de": "Apfel"}, "difficulty": "easy", "category": "fruit"},
    {"id": "w002", "english": "orange", "translations": {"en": "orange", "fr": "orange", "de": "Orange"}, "difficulty": "easy", "category": "fruit"},
    {"id": "w003", "english": "bread", "translations": {"en": "bread", "fr": "pain", "de": "Brot"}, "difficulty": "medium", "category": "food"},
    {"id": "w004", "english": "cheese", "translations": {"en": "cheese", "fr": "fromage", "de": "Käse"}, "difficulty": "hard", "category": "food"},
    {"id": "w005", "english": "water", "translations": {"en": "water", "fr": "eau", "de": "Wasser"}},
    {"id": "w006", "english": "milk", "translations": {"en": "milk", "fr": "lait", "de": "Milch"}},
]


def load(store, source):
    return asyncio.run(store.load(source))


@pytest.fixture
def animals():
    return [dict(item) for item in ANIMALS]


@pytest.fixture
def foods():
    return [dict(item) for item in FOODS]


@pytest.fixture
def store(foods):
    vocab = VocabularyStore()
    load(vocab, foods)
    return vocab


@pytest.fixture
def engine(animals):
    quiz = QuizEngine(seed=7)
    asyncio.run(quiz.load_vocabulary(animals))
    return quiz


@pytest.fixture
def food_engine(store):
    quiz = QuizEngine(store=store, rng=random.Random(11))
    quiz.start()
    return quiz


@pytest.fixture
def vocab_file(tmp_path, foods):
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps(foods), encoding="utf-8")
    return path


@pytest.fixture
def app_settings(tmp_path, vocab_file, monkeypatch):
    """Point the web app at temporary log, db and vocabulary locations."""
    from lingoquest import globals as app_globals
    from lingoquest.config import settings

    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setattr(settings, "DB_DIR", str(tmp_path / "db"))
    monkeypatch.setattr(settings, "VOCAB_SOURCE", str(vocab_file))
    monkeypatch.setattr(settings, "RANDOM_SEED", "3")
    monkeypatch.setattr(settings, "EVENT_LOG_ENABLED", False)
    app_globals.vocab_store.clear()
    app_globals.sessions.clear()
    yield settings
    app_globals.vocab_store.clear()
    app_globals.sessions.clear()
    package_logger = logging.getLogger("lingoquest")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
