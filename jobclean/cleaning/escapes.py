"""Removal of spurious backslash escapes left behind by scrapers.

Some boards run descriptions through a markdown escaper before serving
them, which turns "C++" into "C\\+\\+" and "5-10" into "5\\-10". The
per-character rules must run before the double-backslash collapse or a
literal "\\\\-" would lose both of its characters.
"""

import re

ESCAPED_PUNCTUATION = re.compile(r"""\\([-+*.()\[\]{}|/&%#@!~'"])""")
ESCAPED_DIGIT = re.compile(r"\\(\d)")
ESCAPED_LETTER = re.compile(r"\\([a-zA-Z])")
DOUBLE_BACKSLASH = re.compile(r"\\\\")

# Stray "#" artifacts from escaped markdown. "C#" and "##" headings survive.
TRAILING_HASH = re.compile(r"(?:[ \t]+|^)#+[ \t]*$", re.MULTILINE)
LEADING_HASH = re.compile(r"^#[ \t]+", re.MULTILINE)
STANDALONE_HASH = re.compile(r"[ \t]+#[ \t]+")


def normalize_escapes(text: str) -> str:
    """Unescape punctuation, digits and letters, then collapse double backslashes.

    Args:
        text: Text after entity decoding

    Returns:
        Text without scraper escape sequences or stray hash marks
    """
    if not text:
        return ""

    text = ESCAPED_PUNCTUATION.sub(r"\1", text)
    text = ESCAPED_DIGIT.sub(r"\1", text)
    text = ESCAPED_LETTER.sub(r"\1", text)
    text = DOUBLE_BACKSLASH.sub(lambda _: "\\", text)

    text = TRAILING_HASH.sub("", text)
    text = LEADING_HASH.sub("", text)
    text = STANDALONE_HASH.sub(" ", text)

    return text
