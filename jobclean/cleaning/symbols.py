"""Symbol canonicalization: emphasis, arrows, repeated punctuation, unicode glyphs.

Runs before header detection, which only understands ASCII decoration.
Decoration runs at the very start of a line are left in place here so the
header detector can still recognise "=== Benefits ===" style banners.
"""

import re

# Unicode replacements: problematic char -> ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Quotes
    "‘": "'",  # left single quote
    "’": "'",  # right single quote
    "“": '"',  # left double quote
    "”": '"',  # right double quote
    # Dashes and ellipsis
    "–": "-",  # en dash
    "—": "-",  # em dash
    "…": "...",
    # Bullets
    "•": "*",  # bullet
    "◦": "*",  # white bullet
    "▪": "*",  # small black square
    "▸": "*",  # small triangle
    "►": "*",  # pointer
    "◆": "*",  # diamond
    "■": "*",  # black square
    "□": "*",  # white square
    "○": "*",  # white circle
    "●": "*",  # black circle
    "·": "*",  # middle dot (used as bullet)
    # Arrows
    "→": "->",
    "←": "<-",
    "↑": "^",
    "↓": "v",
    # Marks
    "©": "(c)",
    "®": "(R)",
    "™": "(TM)",
    # Fractions
    "½": "1/2",
    "¼": "1/4",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    # Currencies
    "€": "EUR ",
    "£": "GBP ",
    "¥": "JPY ",
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u2009": " ",  # thin space
    "\u2002": " ",  # en space
    "\u2003": " ",  # em space
    "\t": "  ",
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
}

# Emphasis: "*x*", "**x**", "***x***". The content may not start or end with
# whitespace, so "* item" bullets are never unwrapped.
EMPHASIS = re.compile(r"\*{1,3}([^\s*](?:[^*\n]*[^\s*])?)\*{1,3}")
GLUED_LEADING_ASTERISK = re.compile(r"(?<![^\s(])\*+(?=[A-Za-z])")
GLUED_TRAILING_ASTERISK = re.compile(r"(?<=[A-Za-z0-9.,:;!?)])\*+(?=\s|$)", re.MULTILINE)

RIGHT_ARROW = re.compile(r"[=\-]{2,}>")
LEFT_ARROW = re.compile(r"<[=\-]{2,}")

SENTENCE_SEPARATOR = re.compile(r"([.!?])[ \t]*[-_=]{3,}[ \t]*(?=[A-Z])")

# Group 1 is only set when the run starts the line.
INLINE_SYMBOL_RUN = re.compile(r"(^[ \t]*)?([-_=~+^*#`])\2{2,}", re.MULTILINE)

LINE_AWARE_COLLAPSES = (
    (re.compile(r"(^[ \t]*)?-{2,}", re.MULTILINE), "-"),
    (re.compile(r"(^[ \t]*)?_{2,}", re.MULTILINE), "_"),
    (re.compile(r"(^[ \t]*)?={2,}", re.MULTILINE), ""),
)

SYMBOL_COLLAPSES = (
    (re.compile(r"\|{2,}"), "|"),
    (re.compile(r"!{2,}"), "!"),
    (re.compile(r"\?{2,}"), "?"),
    (re.compile(r"\.{4,}"), "..."),
    (re.compile(r",{2,}"), ","),
    (re.compile(r";{2,}"), ";"),
    (re.compile(r":{3,}"), ":"),
    (re.compile(r"/{3,}"), "/"),
    (re.compile(r"&{2,}"), "&"),
    (re.compile(r"@{2,}"), "@"),
    (re.compile(r"\[{2,}"), "["),
    (re.compile(r"\]{2,}"), "]"),
    (re.compile(r"\({2,}"), "("),
    (re.compile(r"\){2,}"), ")"),
    (re.compile(r"\${2,}"), "$"),
    (re.compile(r"%{2,}"), "%"),
    (re.compile(r">{3,}"), ">>"),
    (re.compile(r"<{3,}"), "<<"),
)

LINE_ENDINGS = re.compile(r"\r\n?")
SPACE_RUN = re.compile(r"[ \t]+")
EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _replace_unless_line_start(pattern: re.Pattern, replacement: str, text: str) -> str:
    return pattern.sub(
        lambda match: match.group(0) if match.group(1) is not None else replacement,
        text,
    )


def unwrap_emphasis(text: str) -> str:
    """Remove markdown emphasis and asterisks glued to words."""
    text = EMPHASIS.sub(r"\1", text)
    text = GLUED_LEADING_ASTERISK.sub("", text)
    text = GLUED_TRAILING_ASTERISK.sub("", text)
    return text


def collapse_symbol_runs(text: str) -> str:
    """Drop inline decoration runs and collapse doubled punctuation."""
    text = _replace_unless_line_start(INLINE_SYMBOL_RUN, " ", text)

    for pattern, replacement in LINE_AWARE_COLLAPSES:
        text = _replace_unless_line_start(pattern, replacement, text)

    for pattern, replacement in SYMBOL_COLLAPSES:
        text = pattern.sub(replacement, text)

    return text


def map_unicode_glyphs(text: str) -> str:
    """Replace unicode glyphs with their ASCII equivalents."""
    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def normalize_whitespace(text: str) -> str:
    """Unify line endings, collapse spaces, trim lines, cap blank lines at one."""
    text = LINE_ENDINGS.sub("\n", text)
    text = SPACE_RUN.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return EXCESS_NEWLINES.sub("\n\n", text)


def canonicalize_symbols(text: str) -> str:
    """Canonicalize emphasis, arrows, separators, repeated symbols and glyphs.

    Emphasis is unwrapped before glyph mapping, so a "•Python" bullet is
    still a bullet after "•" becomes "*".

    Args:
        text: Text after decorative lines were removed

    Returns:
        ASCII-decorated text with normalized whitespace
    """
    if not text:
        return ""

    text = unwrap_emphasis(text)

    text = RIGHT_ARROW.sub("->", text)
    text = LEFT_ARROW.sub("<-", text)

    text = SENTENCE_SEPARATOR.sub(r"\1\n\n", text)

    text = collapse_symbol_runs(text)
    text = map_unicode_glyphs(text)

    return normalize_whitespace(text)
