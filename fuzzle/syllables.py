"""
Syllable Segmentation Module

Splits words into hyphenated syllables for syllable-mode reading.

The split is a vowel/consonant heuristic, not dictionary-backed
hyphenation: silent letters and diphthongs are routinely mis-split. Its
output is kept stable so that displayed phonetics never change between
releases.
"""

import re

VOWELS = frozenset("aeiouyAEIOUY")

SYLLABLE_SEPARATOR = "-"

_TOKEN_OR_SPACE = re.compile(r"(\s+)")


def segment(word: str) -> str:
    """
    Split a word into syllables joined by hyphens.

    A syllable closes after a vowel followed by a consonant. When two
    consonants follow, the first stays with the preceding vowel (``mag-``);
    a single consonant between vowels starts the next syllable (``-ni-``).
    Adjacent vowels are never split.

    Args:
        word: Word to segment

    Returns:
        Hyphenated syllables, e.g. ``"mag-ni-fi-cen-t"`` for ``"magnificent"``
    """
    syllables = []
    current = ""
    length = len(word)

    i = 0
    while i < length:
        char = word[i]
        current += char

        if char in VOWELS and i < length - 1:
            if word[i + 1] not in VOWELS:
                if i < length - 2 and word[i + 2] not in VOWELS:
                    current += word[i + 1]
                    i += 1
                syllables.append(current)
                current = ""
        i += 1

    if current:
        syllables.append(current)

    return SYLLABLE_SEPARATOR.join(syllables)


def syllabify_text(text: str, min_length: int = 4) -> str:
    """
    Segment every word of a text that is longer than ``min_length``.

    Whitespace and shorter words are left exactly as they are.
    """
    parts = _TOKEN_OR_SPACE.split(text)
    return "".join(
        segment(part) if part and not part.isspace() and len(part) > min_length else part
        for part in parts
    )
