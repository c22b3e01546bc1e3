"""Section header detection.

Two best-effort rules promote a line to a canonical "## " heading:

1. A generic banner rule: decoration, a short capitalised label made only of
   letters and spaces, optional trailing decoration.
2. A list of well-known job-posting section names, matched case-insensitively
   against the whole line, with optional decoration or a trailing colon.

A single "*", "-" or "+" followed by a space is a list item under both
rules. Run-together " * " items are split onto their own lines first, so a
label such as "Perks: * Remote" is recognised on the first pass.
"""

import re
from typing import Optional

from .bullets import split_inline_bullets

MAX_GENERIC_HEADER_LENGTH = 50

GENERIC_HEADER = re.compile(
    r"^(?:#{1,6}|[*=\-+~_]{2,}|[=~_])[ \t]*([A-Z][A-Za-z ]*?)[ \t]*[*#=\-+~_]*[ \t]*$"
)

SECTION_NAMES = (
    "Description",
    "Job Description",
    "Overview",
    "Summary",
    "Responsibilities",
    "Key Responsibilities",
    "Duties",
    "Requirements",
    "Required Qualifications",
    "Minimum Qualifications",
    "Preferred Qualifications",
    "Nice to Have",
    "Ideally you'll have",
    "Skills",
    "Technical Skills",
    "Required Skills",
    "Experience",
    "Work Experience",
    "Education",
    "Educational Requirements",
    "Benefits",
    "Perks",
    "What We Offer",
    "About",
    "About Us",
    "About The Team",
    "About The Company",
    "How to Apply",
    "Application Process",
    "Compensation",
    "Salary",
    "Pay",
    "Premium healthcare",
    "Healthcare",
    "Health Benefits",
    "Why join us",
    "Why work here",
    "Culture",
    "Tech Stack",
    "Technologies",
    "Tools",
    "Location",
    "Work Location",
    "Office Location",
    "Flexibility",
    "Working Conditions",
    "Work Environment",
    "What you'll do",
    "What you will do",
    "Your role",
    "Who you are",
    "About you",
    "Your background",
)


# Decoration before a section name. A lone "*", "-" or "+" followed by a
# space is a list marker, so "* Salary" stays a list item.
SECTION_DECORATION = r"(?:#{1,6}|[*=\-+~_]{2,}|[=~_]|[*\-+](?![ \t]))"


def _section_pattern(name: str) -> re.Pattern:
    words = r"[ \t]+".join(re.escape(word) for word in name.split())
    return re.compile(
        rf"^[ \t]*(?:{SECTION_DECORATION}[ \t]*)?({words})[ \t]*[*#=\-+~_:]*[ \t]*$",
        re.IGNORECASE,
    )


SECTION_PATTERNS = tuple(_section_pattern(name) for name in SECTION_NAMES)

EXCESS_NEWLINES = re.compile(r"\n{3,}")


def match_section_header(line: str) -> Optional[str]:
    """Return the heading text for a header-like line, or None.

    Args:
        line: Single line of text

    Returns:
        The label as written in the line, without decoration
    """
    match = GENERIC_HEADER.match(line)
    if match:
        content = match.group(1).strip()
        if content and len(content) < MAX_GENERIC_HEADER_LENGTH:
            return content

    for pattern in SECTION_PATTERNS:
        match = pattern.match(line)
        if match:
            return match.group(1)

    return None


def detect_section_headers(text: str) -> str:
    """Rewrite header-like lines as "## <label>" surrounded by blank lines.

    Args:
        text: Text after symbol canonicalization

    Returns:
        Text with canonical markdown headings
    """
    if not text:
        return ""

    lines = []
    for line in split_inline_bullets(text).split("\n"):
        label = match_section_header(line)
        if label is None:
            lines.append(line)
        else:
            lines.extend(("", f"## {label}", ""))

    return EXCESS_NEWLINES.sub("\n\n", "\n".join(lines))
