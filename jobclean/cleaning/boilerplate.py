"""Removal of recurring non-substantive phrases from job descriptions.

Two heuristics live here:

- A preamble cut: boards often prefix the posting with navigation text or
  a company blurb before a "Job Description" label. When such a label
  starts inside the first PREAMBLE_WINDOW characters, the text before it is
  dropped. Labels further in are assumed to be part of the body.
- Phrase deletion: apply prompts, EOE statements and generic "About Us"
  lead-ins are removed wherever they occur. Only the phrase goes, the
  surrounding sentence is kept.
"""

import re
from typing import Optional

PREAMBLE_WINDOW = 200

# "Job Description" marks the body wherever it appears, even mid-line.
JOB_DESCRIPTION_LABEL = re.compile(r"\b(?=job\s+description\b)", re.IGNORECASE)

# A bare "Description" only counts as a label at the start of a line (after
# optional decoration) or when followed by a colon / end of line.
DESCRIPTION_LABEL = re.compile(
    r"(?:^[ \t]*[*#=\-+~_]*[ \t]*(?=description\b)|\b(?=description\b[ \t]*(?::|$)))",
    re.IGNORECASE | re.MULTILINE,
)

BOILERPLATE_PHRASES = (
    r"submit\s+resume",
    r"apply\s+now",
    r"click\s+to\s+apply",
    r"apply\s+for\s+this\s+position",
    r"apply\s+online",
    r"submit\s+application",
    r"send\s+resume",
    r"email\s+resume",
    r"upload\s+resume",
    r"attach\s+resume",
    r"company\s+overview",
    r"about\s+us",
    r"who\s+we\s+are",
    r"our\s+company",
    r"job\s+overview",
    r"position\s+overview",
    r"role\s+overview",
    r"eoe\s+statement",
    r"equal\s+opportunity\s+employer",
)

BOILERPLATE_PATTERNS = tuple(
    re.compile(rf"\b{phrase}\b", re.IGNORECASE) for phrase in BOILERPLATE_PHRASES
)

# Punctuation stranded once its phrase is gone, the second "!" in
# "Great role! ! Join" after "Apply now" was deleted.
ORPHANED_PUNCTUATION = re.compile(r"(?<=[.!?])[ \t]+[.!?]+(?=[ \t]|$)", re.MULTILINE)


def _find_label_start(text: str, pattern: re.Pattern) -> Optional[int]:
    """Return the offset where the label's phrase begins, if any."""
    match = pattern.search(text)
    if not match:
        return None
    # The label pattern is zero-width at the phrase; leading decoration is
    # part of the match for the line-start form.
    return match.end()


def drop_preamble(text: str) -> str:
    """Drop text preceding a "Job Description"/"Description" label near the top.

    Args:
        text: Markup-free description text

    Returns:
        Text starting at the label when it sits within the preamble window,
        otherwise the input unchanged
    """
    # The bare label is only a fallback: the "Description" inside a
    # "Job Description" must never be cut at.
    index = _find_label_start(text, JOB_DESCRIPTION_LABEL)
    if index is None:
        index = _find_label_start(text, DESCRIPTION_LABEL)

    if index is not None and 0 < index < PREAMBLE_WINDOW:
        return text[index:]
    return text


def remove_boilerplate(text: str) -> str:
    """Cut a short preamble and delete known boilerplate phrases.

    Args:
        text: Markup-free description text

    Returns:
        Text with the preamble and boilerplate phrases removed
    """
    if not text:
        return ""

    text = drop_preamble(text)

    removed = 0
    for pattern in BOILERPLATE_PATTERNS:
        text, count = pattern.subn("", text)
        removed += count

    if removed:
        text = ORPHANED_PUNCTUATION.sub("", text)

    return text
