"""Paragraph segmentation for run-together job descriptions.

Scraped postings frequently arrive as a single line. Recognisable cues that
follow a sentence end start a new paragraph; section-intro cues such as
"Responsibilities:" become headings of their own. Rules run from the most
specific to the most general and all cues are whole-word.
"""

import re
from typing import Iterable

MISSING_SENTENCE_SPACE = re.compile(r"([a-z]{2,}[.!?])([A-Z][a-z])")

# Sentence-ending punctuation. The "." of a list marker at the start of a
# line ("1. Develop APIs", "a. Lead") is not a sentence end.
SENTENCE_END = r"(?<!^\d)(?<!^\d\d)(?<!^\d\d\d)(?<!^[A-Za-z])([.!?])"

SECTION_INTRO_CUES = (
    "Responsibilities:",
    "Requirements:",
    "Qualifications:",
    "What you'll do:",
    "What we offer:",
    "About the role:",
    "About us:",
    "About the company:",
    "The role:",
    "The position:",
    "Key responsibilities:",
    "Essential duties:",
    "Primary responsibilities:",
    "Core responsibilities:",
    "Main responsibilities:",
    "Job duties:",
    "Your responsibilities:",
    "You will:",
    "In this role, you will:",
)

QUALIFICATION_CUES = (
    "Basic qualifications:",
    "Minimum qualifications:",
    "Required qualifications:",
    "Preferred qualifications:",
    "Nice to have:",
    "Must have:",
    "Required skills:",
    "Technical skills:",
    "Experience required:",
    "What we're looking for:",
    "What you need:",
    "You should have:",
    "Ideal candidate:",
    "We're looking for someone who:",
)

BENEFIT_CUES = (
    "Benefits:",
    "Perks:",
    "Why join us?",
    "Why work here?",
    "Culture:",
    "Our culture:",
    "Company culture:",
    "Work environment:",
    "What's in it for you:",
    "We offer:",
    "Our benefits:",
    "Total rewards:",
)

SUBJECT_OPENERS = (
    "We are", "We're", "We have", "We offer", "We provide", "We believe",
    "We value", "We need", "We seek", "We want",
    "You will", "You'll", "You are", "You're", "You have", "You should",
    "You must", "You need", "Your role", "Your responsibilities",
    "The team", "The role", "The position", "The ideal candidate",
    "The company", "The opportunity", "This role", "This position", "This is",
    "Our team", "Our company", "Our mission", "Our vision", "Our values",
    "Our culture", "Our client", "Our product", "Our platform",
)

ACTION_VERBS = (
    "Lead", "Manage", "Develop", "Design", "Build", "Create", "Implement",
    "Maintain", "Collaborate", "Partner", "Drive", "Own", "Define",
    "Establish", "Ensure", "Support", "Analyze", "Optimize", "Coordinate",
    "Execute", "Deliver", "Monitor", "Review", "Assess", "Evaluate",
    "Research", "Investigate", "Communicate", "Present", "Report",
    "Document", "Train", "Mentor", "Guide", "Coach",
)

TRANSITIONS = (
    "Additionally", "Furthermore", "Moreover", "However", "Therefore",
    "In addition", "Also", "Plus", "Finally", "Lastly", "First", "Second",
    "Third", "Next",
)

EXPERIENCE_CUES = (
    "Experience with", "Experience in", "Knowledge of", "Familiarity with",
    "Understanding of", "Expertise in", "Proficiency in",
    "Strong background in",
)

EDUCATION_CUES = (
    "Bachelor", "Master", "PhD", "Degree", "Education:",
    "Educational background:", "Academic qualifications:",
)

LOCATION_CUES = (
    "Location:", "Based in", "Remote work", "Hybrid work", "On-site",
    "Office location:", "Work location:", "This position is based",
)

EQUAL_OPPORTUNITY_CUES = (
    "Equal opportunity", "Affirmative action", "We are committed to",
    "Diversity statement:", "EOE",
)

COMPENSATION_CUES = (
    "Salary:", "Compensation:", "Pay:", "Base salary:",
    "Total compensation:", "The salary range", "Salary range",
)


def _alternation(cues: Iterable[str]) -> str:
    # Longest first so "Key responsibilities:" wins over "Responsibilities:".
    ordered = sorted(cues, key=len, reverse=True)
    return "|".join(re.escape(cue).replace(r"\ ", r"\s+") for cue in ordered)


def _heading_rule(cues: Iterable[str], extra: str = "") -> re.Pattern:
    alternatives = _alternation(cues)
    if extra:
        alternatives = f"{alternatives}|{extra}"
    return re.compile(rf"{SENTENCE_END}\s*({alternatives})(?!\w)", re.IGNORECASE | re.MULTILINE)


def _break_rule(cues: Iterable[str], extra: str = "", ignore_case: bool = True) -> re.Pattern:
    alternatives = _alternation(cues)
    if extra:
        alternatives = f"{extra}|{alternatives}"
    flags = re.MULTILINE | (re.IGNORECASE if ignore_case else 0)
    return re.compile(rf"{SENTENCE_END}\s+({alternatives})(?!\w)", flags)


HEADING_RULES = (
    _heading_rule(SECTION_INTRO_CUES, extra=r"As\s+an?\s+[^.!?\n]{1,60}?,\s+you\s+will:"),
    _heading_rule(QUALIFICATION_CUES),
    _heading_rule(BENEFIT_CUES),
)

BREAK_RULES = (
    _break_rule(SUBJECT_OPENERS),
    _break_rule(ACTION_VERBS, ignore_case=False),
    _break_rule(TRANSITIONS),
    _break_rule(EXPERIENCE_CUES, extra=r"\d+\+?\s*years?\s+of\s+experience"),
    _break_rule(EDUCATION_CUES),
    _break_rule(LOCATION_CUES),
    _break_rule(EQUAL_OPPORTUNITY_CUES, extra=r"[A-Za-z]+\s+is\s+an\s+equal\s+opportunity\s+employer"),
    _break_rule(COMPENSATION_CUES),
)

EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _as_heading(match: re.Match) -> str:
    cue = " ".join(match.group(2).split()).rstrip(":")
    return f"{match.group(1)}\n\n## {cue}\n\n"


def segment_paragraphs(text: str) -> str:
    """Insert paragraph breaks and cue headings after sentence ends.

    Args:
        text: Text with canonical section headings

    Returns:
        Text split into paragraphs at recognised cues
    """
    if not text:
        return ""

    text = MISSING_SENTENCE_SPACE.sub(r"\1 \2", text)

    for rule in HEADING_RULES:
        text = rule.sub(_as_heading, text)

    for rule in BREAK_RULES:
        text = rule.sub(r"\1\n\n\2", text)

    return EXCESS_NEWLINES.sub("\n\n", text)
