"""
Display Module

Renders display text for the terminal with the spoken word highlighted and,
in syllable mode, long words split into syllables.
"""

import re

from rich.text import Text

from fuzzle.syllables import segment

_TOKEN_OR_SPACE = re.compile(r"(\s+)")


def render_text(
    text: str,
    highlight_index: int = -1,
    syllable_mode: bool = False,
    min_length: int = 4,
) -> Text:
    """
    Build a rich Text for the display text.

    Word indices follow the same whitespace tokenization as playback, so
    ``highlight_index`` can be the synchronizer's ``current_index``.

    Args:
        text: Display text
        highlight_index: Index of the word to highlight (-1 for none)
        syllable_mode: Show words longer than ``min_length`` as syllables
        min_length: Length a word must exceed to be split

    Returns:
        Styled rich Text
    """
    rendered = Text()
    index = 0

    for part in _TOKEN_OR_SPACE.split(text):
        if not part:
            continue
        if part.isspace():
            rendered.append(part)
            continue

        shown = segment(part) if syllable_mode and len(part) > min_length else part
        if index == highlight_index:
            style = "highlight"
        elif shown != part:
            style = "syllable"
        else:
            style = ""
        rendered.append(shown, style=style)
        index += 1

    return rendered
