"""HTML markup stripping that keeps the paragraph structure of the source."""

import re

LINE_BREAK_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)
PARAGRAPH_CLOSE_TAG = re.compile(r"</p\s*>", re.IGNORECASE)
PARAGRAPH_OPEN_TAG = re.compile(r"<p(?:\s[^>]*)?>", re.IGNORECASE)

# Only tag-shaped sequences: "<- back" and "salary <50k" are plain text.
ANY_TAG = re.compile(r"</?[A-Za-z!][^>]*>")


def strip_markup(text: str) -> str:
    """Convert <br>/<p> to line breaks and delete every other tag.

    Args:
        text: Text with entities decoded and escapes removed

    Returns:
        Plain text with newline-based structure
    """
    if not text:
        return ""

    text = LINE_BREAK_TAG.sub("\n", text)
    text = PARAGRAPH_CLOSE_TAG.sub("\n\n", text)
    text = PARAGRAPH_OPEN_TAG.sub("", text)
    text = ANY_TAG.sub("", text)

    return text
