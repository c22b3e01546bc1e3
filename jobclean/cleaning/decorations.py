"""Removal of decorative separator lines (rules, banners, ASCII art)."""

import re

DECORATIVE_LINE_PATTERNS = (
    # "-----", "= = =", "*~*~*", "##"
    re.compile(r"^[-=_*~+#](?:[ \t]*[-=_*~+#])+$"),
    # "......"
    re.compile(r"^\.{3,}$"),
    # "<<<<" / ">>>>"
    re.compile(r"^[<>]{3,}$"),
    # "/****" comment-style banners
    re.compile(r"^/\*{2,}/*$"),
    # "|||", "\\//\\//", "[][][]"
    re.compile(r"^[|\\/<>\[\]{}()]{3,}$"),
    # Anything made of 5+ non-word characters
    re.compile(r"^[^\w\s]{5,}$"),
)


def is_decorative_line(line: str) -> bool:
    """Check whether a line is purely a visual separator.

    Args:
        line: Single line of text (untrimmed)

    Returns:
        True if the trimmed line is made only of separator symbols
    """
    stripped = line.strip()
    if not stripped:
        return False

    return any(pattern.match(stripped) for pattern in DECORATIVE_LINE_PATTERNS)


def remove_decorative_lines(text: str) -> str:
    """Blank out every decorative line, keeping the line structure.

    Args:
        text: Text after boilerplate removal

    Returns:
        Text where separator lines are replaced by empty lines
    """
    if not text:
        return ""

    lines = text.split("\n")
    return "\n".join("" if is_decorative_line(line) else line for line in lines)
