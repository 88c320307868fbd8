"""Tests for terminal rendering of the display text."""

from fuzzle.readalong.display import render_text


def _styled(text, style):
    return [text.plain[span.start:span.end] for span in text.spans if span.style == style]


class TestRenderText:
    """Tests for highlighting and syllable mode."""

    def test_plain_text_unchanged(self):
        text = "Reading is\nfun  today."
        assert render_text(text).plain == text

    def test_highlights_word_by_index(self):
        rendered = render_text("one two three", highlight_index=1)
        assert _styled(rendered, "highlight") == ["two"]

    def test_index_counts_across_lines(self):
        rendered = render_text("one two\nthree four", highlight_index=2)
        assert _styled(rendered, "highlight") == ["three"]

    def test_no_highlight_by_default(self):
        assert _styled(render_text("one two"), "highlight") == []

    def test_syllable_mode(self):
        rendered = render_text("The magnificent cat", syllable_mode=True)
        assert rendered.plain == "The mag-ni-fi-cen-t cat"
        assert _styled(rendered, "syllable") == ["mag-ni-fi-cen-t"]

    def test_highlight_wins_in_syllable_mode(self):
        rendered = render_text("The magnificent cat", highlight_index=1, syllable_mode=True)
        assert _styled(rendered, "highlight") == ["mag-ni-fi-cen-t"]
