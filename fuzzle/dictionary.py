"""
Dictionary and Substitution Tables

Loads the word dictionary and the simplification table from YAML. Both are
read once and handed out as read-only mappings.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from fuzzle.utils.config import config
from fuzzle.utils import logger


class DataFileError(ValueError):
    """Raised when a dictionary or substitution file is malformed."""
    pass


class Difficulty(str, Enum):
    """How hard a word is for the reader."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DictionaryEntry:
    """A dictionary definition for one lowercase word."""

    definition: str
    example: str
    emoji: str
    difficulty: Difficulty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "definition": self.definition,
            "example": self.example,
            "emoji": self.emoji,
            "difficulty": self.difficulty.value,
        }


Dictionary = Mapping[str, DictionaryEntry]
SubstitutionTable = Mapping[str, str]


def _read_mapping(path: Path) -> Dict[Any, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataFileError(f"{path.name}: expected a mapping at the top level")
    return data


def parse_entry(word: str, raw: Any) -> DictionaryEntry:
    """
    Build a DictionaryEntry from its raw YAML form.

    Args:
        word: Headword (used in error messages)
        raw: Mapping with definition, example, emoji and difficulty

    Returns:
        Parsed DictionaryEntry
    """
    if not isinstance(raw, dict):
        raise DataFileError(f"Entry '{word}' must be a mapping")

    definition = str(raw.get("definition") or "").strip()
    if not definition:
        raise DataFileError(f"Entry '{word}' has no definition")

    try:
        difficulty = Difficulty(str(raw.get("difficulty", "medium")).lower())
    except ValueError:
        raise DataFileError(
            f"Entry '{word}' has unknown difficulty: {raw.get('difficulty')!r}"
        )

    return DictionaryEntry(
        definition=definition,
        example=str(raw.get("example") or "").strip(),
        emoji=str(raw.get("emoji") or "📚"),
        difficulty=difficulty,
    )


def load_dictionary(path: Optional[Path] = None) -> Dictionary:
    """
    Load a dictionary file.

    Args:
        path: YAML file mapping words to entries (default: configured dictionary)

    Returns:
        Read-only mapping keyed by lowercase word
    """
    path = Path(path) if path else config.dictionary_path
    raw = _read_mapping(path)

    entries = {}
    for word, value in raw.items():
        key = str(word).strip().lower()
        entries[key] = parse_entry(key, value)

    logger.info(f"Loaded {len(entries)} dictionary entries from {path.name}")
    return MappingProxyType(entries)


def load_substitutions(path: Optional[Path] = None) -> SubstitutionTable:
    """
    Load a simplification table.

    Entry order in the file is the order in which substitutions are applied.

    Args:
        path: YAML file mapping complex words to replacements

    Returns:
        Read-only mapping keyed by lowercase word
    """
    path = Path(path) if path else config.simplifications_path
    raw = _read_mapping(path)

    table = {}
    for word, replacement in raw.items():
        if replacement is None:
            raise DataFileError(f"Substitution for '{word}' is empty")
        table[str(word).strip().lower()] = str(replacement)

    logger.info(f"Loaded {len(table)} substitutions from {path.name}")
    return MappingProxyType(table)


@lru_cache(maxsize=None)
def default_dictionary() -> Dictionary:
    """Get the configured dictionary, loading it on first use."""
    return load_dictionary()


@lru_cache(maxsize=None)
def default_substitutions() -> SubstitutionTable:
    """Get the configured simplification table, loading it on first use."""
    return load_substitutions()
