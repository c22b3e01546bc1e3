"""Final cleanup pass over the structured description."""

import re

RESIDUE_LINE = re.compile(r"^[^\w\n]*$", re.MULTILINE)
TRAILING_DECORATION = re.compile(r"[ \t]+[-=_*~+#]{2,}[ \t]*$", re.MULTILINE)
SPACE_RUN = re.compile(r"[ \t]{2,}")
DESCRIPTION_LABEL = re.compile(r"^(?:job\s+)?description\b\s*:?\s*", re.IGNORECASE)
EXCESS_NEWLINES = re.compile(r"\n{3,}")


def finalize_description(text: str) -> str:
    """Remove residue, drop a leading "Description" label and trim.

    Args:
        text: Text after bullet normalization

    Returns:
        The cleaned description
    """
    if not text:
        return ""

    text = RESIDUE_LINE.sub("", text)
    text = TRAILING_DECORATION.sub("", text)
    text = SPACE_RUN.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))

    text = DESCRIPTION_LABEL.sub("", text.lstrip(), count=1)

    return EXCESS_NEWLINES.sub("\n\n", text).strip()
