"""
Word Tokenization Module

Shared whitespace tokenization and canonical word forms used by playback,
vocabulary extraction and definition lookup.
"""

import re
from typing import List

# Punctuation stripped from the end of a token to form its canonical word
TRAILING_PUNCTUATION = ".,!?"

_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """
    Split text into whitespace-delimited tokens.

    Leading and trailing whitespace never produce empty tokens.
    """
    return [token for token in _WHITESPACE.split(text) if token]


def canonical_word(token: str) -> str:
    """Lowercase a token and strip its trailing punctuation."""
    return token.rstrip(TRAILING_PUNCTUATION).lower()
