"""
Text Simplification Module

Replaces complex words with simpler ones from a fixed substitution table.
"""

import re
from typing import List, Optional, Pattern, Tuple

from fuzzle.dictionary import SubstitutionTable, default_substitutions


class TextSimplifier:
    """Apply a substitution table to text, one whole word at a time."""

    def __init__(self, table: Optional[SubstitutionTable] = None):
        """
        Initialize the simplifier.

        Args:
            table: Complex word -> replacement (default: configured table)
        """
        self.table = default_substitutions() if table is None else table
        self._rules = self._compile_rules()

    def _compile_rules(self) -> List[Tuple[Pattern, str]]:
        """Compile one whole-word, case-insensitive pattern per table entry."""
        return [
            (re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE), replacement)
            for word, replacement in self.table.items()
        ]

    def simplify(self, text: str) -> str:
        """
        Simplify text.

        Entries are applied in table order, each on the output of the
        previous one. Replacements are inserted verbatim, without copying
        the case of the word they replace. Word boundaries are Unicode-aware,
        so a key never matches part of a word that goes on in accented letters
        ("naive" leaves "naiveté" alone).

        Args:
            text: Text to simplify

        Returns:
            Simplified text
        """
        if not text:
            return ""

        for pattern, replacement in self._rules:
            # A callable keeps backslashes in the replacement literal
            text = pattern.sub(lambda _match, r=replacement: r, text)

        return text


def simplify(text: str, table: SubstitutionTable) -> str:
    """Simplify text with the given substitution table."""
    return TextSimplifier(table).simplify(text)


async def simplify_async(text: str, table: SubstitutionTable) -> str:
    """Awaitable form of simplify for callers running on an event loop."""
    return simplify(text, table)
