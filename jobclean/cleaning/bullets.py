"""Bullet normalization and the structural spacing pass."""

import re
from typing import List

INLINE_BULLET = re.compile(r"[ \t]+\*[ \t]+")
LEADING_BULLET = re.compile(r"^[ \t]*(?:(?:[*+•◦▪▸►◆■□○●]|-(?!>))[ \t]*)+(?=\S)")
NUMBERED_ITEM = re.compile(r"^[ \t]*(\d{1,3})[.)](?:[ \t]+|(?=[A-Za-z]))")
LETTER_ITEM = re.compile(r"^[ \t]*[a-zA-Z][.)][ \t]+")
SYMBOL_ONLY_LINE = re.compile(r"^[^\w]+$")
NUMBERED_PREFIX = re.compile(r"^\d+\.\s")

HEADER = "header"
BULLET = "bullet"
TEXT = "text"


def split_inline_bullets(text: str) -> str:
    """Move each run-together " * " item onto its own line."""
    return INLINE_BULLET.sub("\n* ", text)


def line_kind(line: str) -> str:
    """Classify a trimmed, non-empty line as header, bullet or text."""
    if line.startswith("## "):
        return HEADER
    if line.startswith("* ") or NUMBERED_PREFIX.match(line):
        return BULLET
    return TEXT


def normalize_bullet_line(line: str) -> str:
    """Rewrite a single line's list marker in canonical form."""
    if line.lstrip().startswith("## "):
        return line.strip()

    line = LEADING_BULLET.sub("* ", line, count=1)
    line = NUMBERED_ITEM.sub(r"\1. ", line, count=1)
    line = LETTER_ITEM.sub("* ", line, count=1)
    line = line.strip()

    if SYMBOL_ONLY_LINE.match(line):
        return ""
    return line


def _separator(previous: str, current: str, had_blank: bool) -> str:
    previous_kind = line_kind(previous)
    current_kind = line_kind(current)

    if HEADER in (previous_kind, current_kind):
        return "\n\n"
    if previous_kind == BULLET:
        return "\n" if current_kind == BULLET else "\n\n"
    if current_kind == BULLET:
        return "\n\n" if had_blank else "\n"
    if had_blank or (previous.endswith(".") and current[:1].isupper()):
        return "\n\n"
    return "\n"


def apply_structural_spacing(lines: List[str]) -> str:
    """Join lines with the blank-line layout of the cleaned description.

    - exactly one blank line before and after a heading
    - no blank line between consecutive bullets
    - one blank line after the last bullet of a run
    - text lines keep an existing blank line, and get one when a sentence
      ends with "." and the next line starts with a capital letter

    Args:
        lines: Normalized lines, empty strings marking blank lines

    Returns:
        Joined text
    """
    parts: List[str] = []
    previous = None
    had_blank = False

    for line in lines:
        if not line:
            had_blank = True
            continue

        if previous is not None:
            parts.append(_separator(previous, line, had_blank))
        parts.append(line)

        previous = line
        had_blank = False

    return "".join(parts)


def normalize_bullets(text: str) -> str:
    """Put every list item on its own line with a canonical marker.

    Run-together " * " items are split first, then leading glyphs become
    "* ", numbered items "N. " and lettered items "* ". Decimals such as
    "3.5 years" are not list markers.

    Args:
        text: Text after paragraph segmentation

    Returns:
        Text with canonical bullets and structural spacing
    """
    if not text:
        return ""

    lines = [normalize_bullet_line(line) for line in split_inline_bullets(text).split("\n")]

    return apply_structural_spacing(lines)
