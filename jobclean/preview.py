"""Plain-text previews of cleaned descriptions for job cards.

A preview is the description with its markdown removed, collapsed onto one
line and cut to a maximum length. Cuts prefer a sentence end, then a word
boundary, so cards do not end mid-word unless there is no other choice.
"""

import re

DEFAULT_PREVIEW_LENGTH = 250
ELLIPSIS = "..."

# Only a sentence end in the last 30% of the window is used as the cut point.
SENTENCE_CUT_RATIO = 0.7
# Only a space in the last 20% of the window is used as the cut point.
WORD_CUT_RATIO = 0.8

BULLET_PREFIX = re.compile(r"^\* ", re.MULTILINE)
NUMBER_PREFIX = re.compile(r"^\d+\. ", re.MULTILINE)
HEADING_PREFIX = re.compile(r"^#{1,6}\s+", re.MULTILINE)
BOLD = re.compile(r"\*\*([^*\n]+)\*\*")
ITALIC = re.compile(r"\*([^*\n]+)\*")
WHITESPACE = re.compile(r"\s+")


def strip_markdown(text: str) -> str:
    """Remove markdown syntax and collapse the text onto a single line.

    List prefixes go first so a "* item" marker is never read as the start
    of an italic span.

    Args:
        text: Cleaned description

    Returns:
        Plain text with single spaces between words

    Example:
        >>> strip_markdown("## Benefits\\n\\n* **Remote** work")
        'Benefits Remote work'
    """
    if not text:
        return ""

    text = BULLET_PREFIX.sub("", text)
    text = NUMBER_PREFIX.sub("", text)
    text = HEADING_PREFIX.sub("", text)
    text = BOLD.sub(r"\1", text)
    text = ITALIC.sub(r"\1", text)

    return WHITESPACE.sub(" ", text).strip()


def build_preview(text: str, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Build a bounded-length plain-text preview.

    Args:
        text: Cleaned description
        max_length: Maximum preview length before the optional "..." suffix

    Returns:
        The plain text itself when it fits, otherwise a cut version. A cut at
        a sentence end carries no suffix; other cuts end with "...".

    Example:
        >>> build_preview("Short and sweet.")
        'Short and sweet.'
    """
    plain_text = strip_markdown(text)
    if len(plain_text) <= max_length:
        return plain_text

    truncated = plain_text[:max_length]

    last_sentence_end = max(truncated.rfind("."), truncated.rfind("!"), truncated.rfind("?"))
    if last_sentence_end > max_length * SENTENCE_CUT_RATIO:
        return truncated[: last_sentence_end + 1].strip()

    last_space = truncated.rfind(" ")
    if last_space > max_length * WORD_CUT_RATIO:
        return truncated[:last_space].strip() + ELLIPSIS

    return truncated.strip() + ELLIPSIS
