"""HTML entity decoding for scraped job descriptions.

Only a fixed table of named entities is decoded. Anything else that looks
like an entity is left as-is so the later stages see the text unchanged.
"""

# Applied in order: "&amp;" first so double-escaped entities ("&amp;lt;")
# decode all the way down like the upstream boards expect.
ENTITY_TABLE = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&#39;", "'"),
    ("&nbsp;", " "),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
    ("&rsquo;", "'"),
    ("&lsquo;", "'"),
    ("&rdquo;", '"'),
    ("&ldquo;", '"'),
)


def decode_entities(text: str) -> str:
    """Replace the known HTML entities with their literal characters.

    Args:
        text: Raw posting text

    Returns:
        Text with known entities decoded, unknown entities untouched

    Example:
        >>> decode_entities("Full &amp; Part Time")
        'Full & Part Time'
    """
    if not text:
        return ""

    for entity, replacement in ENTITY_TABLE:
        text = text.replace(entity, replacement)

    return text
