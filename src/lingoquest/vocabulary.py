import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx
import pandas as pd
from pydantic import ValidationError

from .errors import LoadError
from .models import VocabularyEntry

logger = logging.getLogger(__name__)

FLAT_LANGUAGE_KEYS = ("en", "fr", "de")
LEGACY_QUESTION_KEYS = ("options", "correctAnswer")


# --- Strategy Pattern: Vocabulary Sources ---
class VocabularySource(ABC):
    """Abstract base class for places vocabulary can be fetched from."""

    @abstractmethod
    async def fetch(self) -> Any:
        """Return the raw decoded payload (expected to be a list of entries)."""

    def describe(self) -> str:
        return self.__class__.__name__


class InMemorySource(VocabularySource):
    def __init__(self, entries: Any):
        self.entries = entries

    async def fetch(self) -> Any:
        return self.entries

    def describe(self) -> str:
        return "in-memory vocabulary"


class JsonFileSource(VocabularySource):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Any:
        return json.loads(self.path.read_text(encoding="utf-8-sig"))

    async def fetch(self) -> Any:
        return await asyncio.to_thread(self._read)

    def describe(self) -> str:
        return str(self.path)


class CsvFileSource(VocabularySource):
    """CSV with one row per entry: id, english, en, fr, de, difficulty, category."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> List[Dict[str, Any]]:
        df = pd.read_csv(self.path, encoding="utf-8", dtype=str, keep_default_na=False)
        missing = {"id", "english"} - set(df.columns)
        if missing:
            raise LoadError(f"{self.path.name}: missing columns {sorted(missing)}")
        return df.to_dict("records")

    async def fetch(self) -> Any:
        return await asyncio.to_thread(self._read)

    def describe(self) -> str:
        return str(self.path)


class UrlSource(VocabularySource):
    """Fetches a JSON vocabulary over HTTP. There is no retry policy."""

    def __init__(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url
        self.client = client
        self.timeout = timeout

    async def fetch(self) -> Any:
        if self.client is not None:
            response = await self.client.get(self.url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)
        if response.is_error:
            raise LoadError(f"HTTP error status: {response.status_code}")
        return response.json()

    def describe(self) -> str:
        return self.url


def source_for(value: Any) -> VocabularySource:
    """Pick a source implementation for a path, URL, list or ready-made source."""
    if isinstance(value, VocabularySource):
        return value
    if isinstance(value, (list, tuple)):
        return InMemorySource(list(value))
    if isinstance(value, (str, Path)):
        text = str(value)
        if text.startswith(("http://", "https://")):
            return UrlSource(text)
        if os.path.splitext(text)[1].lower() == ".csv":
            return CsvFileSource(text)
        return JsonFileSource(text)
    raise LoadError(f"Unsupported vocabulary source: {value!r}")


# --- Normalization ---
def normalize_raw_entry(raw: Any) -> Dict[str, Any]:
    """Fold flat per-language keys into ``translations``.

    Entries carrying pre-authored ``options``/``correctAnswer`` belong to an
    older question format and are rejected.
    """
    if not isinstance(raw, dict):
        raise LoadError(f"Vocabulary entry is not an object: {raw!r}")
    if "translations" not in raw and any(key in raw for key in LEGACY_QUESTION_KEYS):
        raise LoadError(
            f"Entry {raw.get('id', '<unknown>')} uses pre-authored options; "
            "expected a translations mapping"
        )

    entry = {k: v for k, v in raw.items() if k not in FLAT_LANGUAGE_KEYS}
    translations = {}
    for code in FLAT_LANGUAGE_KEYS:
        value = raw.get(code)
        if value is not None and str(value).strip():
            translations[code] = value
    nested = raw.get("translations")
    if isinstance(nested, dict):
        translations.update(nested)
    elif nested is not None:
        raise LoadError(f"Entry {raw.get('id', '<unknown>')}: translations must be a mapping")
    entry["translations"] = translations
    return entry


def parse_entries(raw_entries: Any) -> List[VocabularyEntry]:
    if not isinstance(raw_entries, list):
        raise LoadError(
            f"Vocabulary must be a list of entries, got {type(raw_entries).__name__}"
        )
    if not raw_entries:
        raise LoadError("Loaded vocabulary is empty.")

    entries: List[VocabularyEntry] = []
    seen: Dict[str, int] = {}
    for position, raw in enumerate(raw_entries):
        try:
            entry = VocabularyEntry.model_validate(normalize_raw_entry(raw))
        except ValidationError as e:
            raise LoadError(f"Invalid vocabulary entry at position {position}: {e}") from e
        if entry.id in seen:
            raise LoadError(
                f"Duplicate entry id: {entry.id} (positions {seen[entry.id]} and {position})"
            )
        seen[entry.id] = position
        entries.append(entry)
    return entries


# --- Service Layer: Vocabulary Store ---
class VocabularyStore:
    """Holds the canonical vocabulary list.

    The list is replaced wholesale on each successful load and never mutated
    otherwise. ``version`` increases with every load so that session pools
    built on an older list can notice and rebuild.
    """

    def __init__(self):
        self._entries: Tuple[VocabularyEntry, ...] = ()
        self.version = 0
        self.source_name: Optional[str] = None

    async def load(self, source: Any) -> Tuple[VocabularyEntry, ...]:
        vocab_source = source_for(source)
        name = vocab_source.describe()
        try:
            raw = await vocab_source.fetch()
        except LoadError:
            logger.error(f"Error loading vocabulary from {name}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Error loading vocabulary from {name}: {e}")
            raise LoadError(f"Failed to load vocabulary from {name}: {e}") from e

        try:
            entries = parse_entries(raw)
        except LoadError as e:
            logger.error(f"Rejected vocabulary from {name}: {e}")
            raise

        self._entries = tuple(entries)
        self.version += 1
        self.source_name = name
        logger.info(f"Loaded {len(entries)} vocabulary entries from {name}")
        return self._entries

    def get_all(self) -> Tuple[VocabularyEntry, ...]:
        return self._entries

    def get(self, entry_id: Any) -> Optional[VocabularyEntry]:
        entry_id = str(entry_id)
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def languages(self) -> List[str]:
        return sorted({code for entry in self._entries for code in entry.translations})

    def difficulty_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for entry in self._entries:
            tier = entry.difficulty or "any"
            counts[tier] = counts.get(tier, 0) + 1
        return counts

    def clear(self) -> None:
        """Forget the loaded vocabulary; pools built on it rebuild on next use."""
        self._entries = ()
        self.version += 1
        self.source_name = None

    @property
    def is_loaded(self) -> bool:
        return bool(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
