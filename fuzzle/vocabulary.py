"""
Vocabulary Module

Picks difficult words out of a text and keeps the reader's personal
vocabulary list.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from fuzzle.dictionary import Dictionary, Difficulty
from fuzzle.syllables import segment
from fuzzle.words import canonical_word, tokenize

# Tokens must be longer than this to count as difficult
MIN_WORD_LENGTH = 6

# Unknown words longer than this are rated hard
HARD_WORD_LENGTH = 8

DEFAULT_LIMIT = 3

PLACEHOLDER_EMOJIS = ("📚", "🎯", "⭐", "🌟", "💡")
PLACEHOLDER_DEFINITION = "A word that appears in the text"
PLACEHOLDER_EXAMPLE = 'The word "{word}" is used in this context.'

MANUAL_EMOJI = "📚"
MANUAL_EXAMPLE = 'Here\'s an example: "{word}" is used in sentences.'


def new_item_id() -> str:
    """Generate a unique vocabulary item id."""
    return uuid.uuid4().hex


@dataclass
class VocabularyItem:
    """A word saved to the reader's vocabulary."""

    id: str
    word: str  # Lowercase, punctuation stripped
    phonetic: str  # Syllable-segmented word
    definition: str
    example: str
    emoji: str
    difficulty: Difficulty

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display or export."""
        return {
            "id": self.id,
            "word": self.word,
            "phonetic": self.phonetic,
            "definition": self.definition,
            "example": self.example,
            "emoji": self.emoji,
            "difficulty": self.difficulty.value,
        }


def _select_candidates(text: str, existing_words: Set[str], limit: int) -> List[str]:
    candidates = []
    seen = set(existing_words)
    for token in tokenize(text):
        if len(candidates) >= limit:
            break
        if len(token) <= MIN_WORD_LENGTH:
            continue
        word = canonical_word(token)
        if not word or token.lower() in seen or word in seen:
            continue
        # Repeats later in the same text are not new either
        seen.add(word)
        candidates.append(token)
    return candidates


def _build_item(token: str, position: int, dictionary: Dictionary) -> VocabularyItem:
    word = canonical_word(token)
    entry = dictionary.get(word)

    if entry is not None:
        return VocabularyItem(
            id=new_item_id(),
            word=word,
            phonetic=segment(word),
            definition=entry.definition,
            example=entry.example,
            emoji=entry.emoji,
            difficulty=entry.difficulty,
        )

    return VocabularyItem(
        id=new_item_id(),
        word=word,
        phonetic=segment(word),
        definition=PLACEHOLDER_DEFINITION,
        example=PLACEHOLDER_EXAMPLE.format(word=word),
        emoji=PLACEHOLDER_EMOJIS[position % len(PLACEHOLDER_EMOJIS)],
        difficulty=Difficulty.HARD if len(token) > HARD_WORD_LENGTH else Difficulty.MEDIUM,
    )


def extract(
    text: str,
    existing_words: Iterable[str],
    dictionary: Dictionary,
    limit: int = DEFAULT_LIMIT,
) -> List[VocabularyItem]:
    """
    Pick difficult words from a text.

    A token is a candidate when it is longer than six characters and the
    reader does not already have it. Candidates keep their order in the
    text. Words missing from the dictionary get a placeholder definition.

    Args:
        text: Text to scan
        existing_words: Lowercase words already in the vocabulary
        dictionary: Word dictionary
        limit: Maximum number of items to return

    Returns:
        New vocabulary items, in text order
    """
    if not text or limit <= 0:
        return []

    known = {w.lower() for w in existing_words}
    candidates = _select_candidates(text, known, limit)

    return [
        _build_item(token, position, dictionary)
        for position, token in enumerate(candidates)
    ]


class VocabularyCollection:
    """In-memory, ordered vocabulary of a single reader."""

    def __init__(self, items: Optional[Iterable[VocabularyItem]] = None):
        self._items: List[VocabularyItem] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[VocabularyItem]:
        return iter(list(self._items))

    @property
    def words(self) -> Set[str]:
        """Lowercase words currently in the vocabulary."""
        return {item.word.lower() for item in self._items}

    def get(self, item_id: str) -> Optional[VocabularyItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add(self, items: Iterable[VocabularyItem]) -> None:
        self._items.extend(items)

    def harvest(
        self,
        text: str,
        dictionary: Dictionary,
        limit: int = DEFAULT_LIMIT,
    ) -> List[VocabularyItem]:
        """
        Extract new difficult words from a text and add them.

        Returns:
            The items that were added
        """
        items = extract(text, self.words, dictionary, limit)
        self.add(items)
        return items

    def add_word(
        self,
        word: str,
        definition: str,
        example: str = "",
        emoji: str = MANUAL_EMOJI,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> Optional[VocabularyItem]:
        """
        Add a word entered by the reader.

        Args:
            word: The word (required)
            definition: Its definition (required)
            example: Example sentence; a generic one is used when blank
            emoji: Picture shown next to the word
            difficulty: Difficulty rating

        Returns:
            The new item, or None when word or definition is blank
        """
        word = word.strip().lower()
        definition = definition.strip()
        if not word or not definition:
            return None

        item = VocabularyItem(
            id=new_item_id(),
            word=word,
            phonetic=segment(word),
            definition=definition,
            example=example.strip() or MANUAL_EXAMPLE.format(word=word),
            emoji=emoji,
            difficulty=difficulty,
        )
        self._items.append(item)
        return item

    def remove(self, item_id: str) -> bool:
        """
        Remove an item by id.

        Returns:
            True if an item was removed
        """
        for i, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[i]
                return True
        return False
