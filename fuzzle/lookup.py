"""
Definition Lookup Module

Looks up a single word for hover-style inspection.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fuzzle.dictionary import Dictionary, Difficulty
from fuzzle.syllables import segment
from fuzzle.words import canonical_word


@dataclass(frozen=True)
class DefinitionRecord:
    """Everything needed to show a word's definition on its own."""

    word: str
    definition: str
    phonetic: str
    example: str
    emoji: str
    difficulty: Difficulty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "definition": self.definition,
            "phonetic": self.phonetic,
            "example": self.example,
            "emoji": self.emoji,
            "difficulty": self.difficulty.value,
        }


def lookup(word: str, dictionary: Dictionary) -> Optional[DefinitionRecord]:
    """
    Look up a word as it appears in the text.

    Case and trailing punctuation are ignored, so ``"Cognitive,"`` finds
    the entry for ``"cognitive"``.

    Returns:
        The definition record, or None if the word is not in the dictionary
    """
    clean = canonical_word(word)
    entry = dictionary.get(clean)
    if entry is None:
        return None

    return DefinitionRecord(
        word=clean,
        definition=entry.definition,
        phonetic=segment(clean),
        example=entry.example,
        emoji=entry.emoji,
        difficulty=entry.difficulty,
    )
