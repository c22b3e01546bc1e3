"""Unit tests for symbol canonicalization."""

from jobclean.cleaning.symbols import (
    canonicalize_symbols,
    collapse_symbol_runs,
    map_unicode_glyphs,
    normalize_whitespace,
    unwrap_emphasis,
)


class TestUnwrapEmphasis:
    """Tests for markdown emphasis removal."""

    def test_single_and_double_emphasis(self):
        """Test *x* and **x** are unwrapped."""
        assert unwrap_emphasis("a *Senior* engineer") == "a Senior engineer"
        assert unwrap_emphasis("**Bold** and ***very*** bold") == "Bold and very bold"

    def test_bullet_marker_is_not_emphasis(self):
        """Test that "* item" lines are left alone."""
        text = "* Python\n* Go"
        assert unwrap_emphasis(text) == text

    def test_glued_asterisks_removed(self):
        """Test asterisks glued to the start or end of a word."""
        assert unwrap_emphasis("*Remote only") == "Remote only"
        assert unwrap_emphasis("Remote only* please") == "Remote only please"


class TestMapUnicodeGlyphs:
    """Tests for glyph to ASCII mapping."""

    def test_quotes_and_dashes(self):
        """Test typographic quotes and dashes become ASCII."""
        assert map_unicode_glyphs("“Quote” – it’s great—really") == "\"Quote\" - it's great-really"

    def test_bullets_become_asterisks(self):
        """Test bullet glyphs map to the canonical marker character."""
        assert map_unicode_glyphs("• one\n◦ two\n▪ three") == "* one\n* two\n* three"

    def test_invisible_characters(self):
        """Test non-breaking spaces become spaces and zero-width characters vanish."""
        assert map_unicode_glyphs("5\u00a0years\u200b of\u2009Go\ufeff") == "5 years of Go"

    def test_arrows_and_marks(self):
        """Test arrows and trademark signs."""
        assert map_unicode_glyphs("Python™ → Go") == "Python(TM) -> Go"


class TestCollapseSymbolRuns:
    """Tests for repeated symbol collapsing."""

    def test_repeated_punctuation(self):
        """Test runs of punctuation collapse to one character."""
        assert collapse_symbol_runs("Great!!! Really??? Yes,, no") == "Great! Really? Yes, no"

    def test_inline_decoration_removed(self):
        """Test decoration runs inside a line are replaced by a space."""
        assert collapse_symbol_runs("Benefits ~~~~ Perks") == "Benefits   Perks"

    def test_line_start_decoration_kept(self):
        """Test a decoration run at the start of a line survives for header detection."""
        assert collapse_symbol_runs("=== Benefits ===") == "=== Benefits  "

    def test_ellipsis_kept(self):
        """Test that longer dot runs become a three-dot ellipsis."""
        assert collapse_symbol_runs("and more.....") == "and more..."


class TestNormalizeWhitespace:
    """Tests for whitespace normalization."""

    def test_line_endings_spaces_and_blank_lines(self):
        """Test CRLF, space runs, line trimming and blank line capping."""
        assert normalize_whitespace("a \t b\r\n\r\n\r\n\r\nc ") == "a b\n\nc"


class TestCanonicalizeSymbols:
    """Tests for the full symbol stage."""

    def test_arrows(self):
        """Test long ASCII arrows are shortened."""
        assert canonicalize_symbols("Step one ---> step two <== back") == "Step one -> step two <- back"

    def test_sentence_separator_becomes_paragraph_break(self):
        """Test a dash run between sentences becomes a blank line."""
        result = canonicalize_symbols("a Senior engineer. ----- Responsibilities: Build things.")
        assert result == "a Senior engineer.\n\nResponsibilities: Build things."

    def test_banner_header_keeps_leading_decoration(self):
        """Test that a banner keeps its leading run and loses the trailing one."""
        assert canonicalize_symbols("=== Benefits ===") == "=== Benefits"

    def test_unicode_bullets(self):
        """Test unicode bullets become "* " markers."""
        assert canonicalize_symbols("•\u00a0Python\n•\u00a0Go") == "* Python\n* Go"

    def test_empty_input(self):
        """Test that empty input yields an empty string."""
        assert canonicalize_symbols("") == ""
