"""Salary range derivation from free text and structured upstream data.

Description patterns are tried in a fixed order and the first one that
matches anywhere in the text wins. The order goes from the most explicit
phrasing (ranges with a period keyword) to the loosest (bare numbers), so
reordering changes results.

Every range is reported per year. Hourly figures are annualized on a
40 hour week, 4 week month, 12 month year calendar.
"""

import re
from typing import List, NamedTuple, Optional, Tuple

from jobclean.domain.models import SalaryRange, StructuredSalary
from jobclean.logging import get_logger

logger = get_logger(__name__, component="salary")

HOURS_PER_WEEK = 40
WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12
HOURS_PER_YEAR = HOURS_PER_WEEK * WEEKS_PER_MONTH * MONTHS_PER_YEAR

# Amounts below this with no explicit period are assumed to be hourly rates.
HOURLY_THRESHOLD = 10_000

DEFAULT_CURRENCY = "USD"

# Structured salary periods, matched by substring of the lowercased period.
PERIOD_MULTIPLIERS: Tuple[Tuple[str, int], ...] = (
    ("hour", HOURS_PER_YEAR),
    ("day", 5 * WEEKS_PER_MONTH * MONTHS_PER_YEAR),
    ("daily", 5 * WEEKS_PER_MONTH * MONTHS_PER_YEAR),
    ("week", WEEKS_PER_MONTH * MONTHS_PER_YEAR),
    ("month", MONTHS_PER_YEAR),
)

_N = r"([0-9][0-9,]*(?:\.[0-9]+)?)"
_K = r"([0-9]+(?:\.[0-9]+)?[kK])"
_DASH = r"\s*[-–—]\s*"
_TO = r"\s+to\s+"
_DASH_OR_TO = r"\s*(?:[-–—]|to)\s*"
_YEAR = r"\s*(?:(?:per|a|an)\s+|/\s*)?(?:year|yr|annum|annually)\b"
_HOUR = r"\s*(?:(?:per|an?)\s+|/\s*)?(?:hour|hr)\b"
_PER_YEAR = r"(?:\s*/\s*(?:year|yr))?"


class SalaryPattern(NamedTuple):
    regex: re.Pattern
    # True when the single amount matched is an upper bound ("up to $Y")
    max_only: bool


SALARY_PATTERNS: Tuple[SalaryPattern, ...] = tuple(
    SalaryPattern(re.compile(pattern, re.IGNORECASE), pattern.startswith(r"up\s+to"))
    for pattern in (
        # Ranges with a year keyword
        rf"\${_N}{_DASH}\${_N}{_YEAR}",
        rf"\${_K}{_DASH}\${_K}{_YEAR}",
        rf"\${_N}{_TO}\${_N}{_YEAR}",
        rf"\${_K}{_TO}\${_K}{_YEAR}",
        # "$X/year up to $Y/year"
        rf"\${_N}\s*/\s*(?:year|yr)\s+up\s+to\s+\${_N}\s*/\s*(?:year|yr)\b",
        rf"\${_K}\s*/\s*(?:year|yr)\s+up\s+to\s+\${_K}\s*/\s*(?:year|yr)\b",
        rf"ranges?\s+from\s+\${_N}{_PER_YEAR}\s+up\s+to\s+\${_N}{_PER_YEAR}",
        rf"from\s+\${_N}{_PER_YEAR}\s+(?:up\s+)?to\s+\${_N}{_PER_YEAR}",
        # Hourly ranges
        rf"\${_N}{_DASH}\${_N}{_HOUR}",
        rf"\${_N}{_TO}\${_N}{_HOUR}",
        rf"\${_N}\s*/\s*(?:hour|hr){_DASH}\${_N}\s*/\s*(?:hour|hr)\b",
        # Base salary, optionally followed by a bonus
        rf"base\s+(?:salary\s+)?(?:of\s+)?\${_N}{_DASH_OR_TO}\${_N}",
        rf"\${_N}{_DASH_OR_TO}\${_N}\s+base\b",
        # Total compensation
        rf"total\s+compensation\s+(?:of\s+)?\${_N}{_DASH_OR_TO}\${_N}",
        rf"\bTC\s*:?\s*\${_N}{_DASH_OR_TO}\${_N}",
        # Bare ranges, assumed yearly
        rf"\${_N}{_DASH}\${_N}(?![\dkK])",
        rf"\${_K}{_DASH}\${_K}(?!\w)",
        # "up to $Y": the lower bound is unknown
        rf"up\s+to\s+\$(?:{_K}|{_N})(?:{_HOUR}|{_YEAR})?",
        # Single values
        rf"\${_N}{_YEAR}",
        rf"\${_K}{_YEAR}",
        rf"\${_N}{_HOUR}",
        # European format: "50 000$ - 70 000$"
        r"([0-9]{1,3}(?: [0-9]{3})*) ?\$\s*(?:[-–—]|to)\s*([0-9]{1,3}(?: [0-9]{3})*) ?\$",
        # Salary mentioned in a sentence
        rf"salary\s+(?:is\s+)?(?:between\s+)?\${_N}\s*(?:and|[-–—]|to)\s*\${_N}",
        rf"compensation\s+(?:is\s+)?(?:between\s+)?\${_N}\s*(?:and|[-–—]|to)\s*\${_N}",
    )
)

HOURLY_KEYWORD = re.compile(r"\b(?:hour|hourly|hr)s?\b", re.IGNORECASE)
YEARLY_KEYWORD = re.compile(r"\b(?:year|yearly|yr|annually|annum)s?\b", re.IGNORECASE)


def parse_amount(token: str) -> float:
    """Parse a salary token such as "$120,000", "95k" or "50 000".

    Args:
        token: Amount as written in the text

    Returns:
        Numeric amount ("k" multiplies by 1000)

    Raises:
        ValueError: If the token holds no number
    """
    cleaned = re.sub(r"[$,\s]", "", token)
    if cleaned[-1:] in ("k", "K"):
        return float(cleaned[:-1]) * 1000
    return float(cleaned)


def _annualize(value: Optional[float], multiplier: int) -> Optional[int]:
    if value is None:
        return None
    return int(round(value * multiplier))


def _build_range(
    low: Optional[float], high: Optional[float], multiplier: int, currency: str
) -> SalaryRange:
    min_salary = _annualize(low, multiplier)
    max_salary = _annualize(high, multiplier)

    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        min_salary, max_salary = max_salary, min_salary

    return SalaryRange(min=min_salary, max=max_salary, currency=currency, period="yearly")


def _match_amounts(pattern: SalaryPattern, match: re.Match) -> Tuple[Optional[float], float]:
    amounts: List[float] = [parse_amount(group) for group in match.groups() if group]

    if pattern.max_only:
        return None, amounts[0]

    low = amounts[0]
    high = amounts[1] if len(amounts) > 1 else amounts[0]
    return low, high


def extract_salary_from_description(description: Optional[str]) -> Optional[SalaryRange]:
    """Derive a yearly salary range from free text.

    Args:
        description: Description text (cleaned or raw)

    Returns:
        SalaryRange in USD per year, or None if no pattern matches

    Example:
        >>> extract_salary_from_description("$90,000 - $120,000 per year")
        SalaryRange(min=90000, max=120000, currency='USD', period='yearly')
    """
    if not description:
        return None

    for index, pattern in enumerate(SALARY_PATTERNS):
        match = pattern.regex.search(description)
        if not match:
            continue

        low, high = _match_amounts(pattern, match)
        phrase = match.group(0)

        is_hourly = bool(HOURLY_KEYWORD.search(phrase))
        is_yearly = bool(YEARLY_KEYWORD.search(phrase))
        if is_hourly or (not is_yearly and high < HOURLY_THRESHOLD):
            multiplier = HOURS_PER_YEAR
        else:
            multiplier = 1

        salary = _build_range(low, high, multiplier, DEFAULT_CURRENCY)
        logger.debug(
            "Salary extracted from description",
            extra={
                "event": "salary.extracted",
                "salary_source": "description",
                "pattern_index": index,
                "annualized": multiplier != 1,
                "salary_min": salary.min,
                "salary_max": salary.max,
            },
        )
        return salary

    return None


def _structured_multiplier(period: Optional[str], max_salary: Optional[float]) -> int:
    normalized = (period or "").strip().lower()

    if not normalized:
        if max_salary is not None and max_salary < HOURLY_THRESHOLD:
            return HOURS_PER_YEAR
        return 1

    for keyword, multiplier in PERIOD_MULTIPLIERS:
        if keyword in normalized:
            return multiplier
    return 1


def extract_salary_from_structured(source: Optional[StructuredSalary]) -> Optional[SalaryRange]:
    """Convert an upstream structured salary to a yearly range.

    Explicit hourly, daily, weekly and monthly periods are annualized. With
    no period at all, a maximum below 10,000 is taken to be an hourly rate.

    Args:
        source: Structured salary from the posting

    Returns:
        SalaryRange per year, or None when both bounds are missing
    """
    if source is None or (source.min is None and source.max is None):
        return None

    multiplier = _structured_multiplier(source.period, source.max)
    salary = _build_range(
        source.min, source.max, multiplier, source.currency or DEFAULT_CURRENCY
    )

    logger.debug(
        "Salary taken from structured data",
        extra={
            "event": "salary.extracted",
            "salary_source": "structured",
            "period": source.period,
            "annualized": multiplier != 1,
            "salary_min": salary.min,
            "salary_max": salary.max,
        },
    )
    return salary


def derive_salary(
    description: Optional[str], structured: Optional[StructuredSalary] = None
) -> Optional[SalaryRange]:
    """Derive a salary range, preferring the description over structured data.

    Args:
        description: Cleaned description
        structured: Structured salary from the posting, if any

    Returns:
        SalaryRange, or None when neither source yields one
    """
    return extract_salary_from_description(description) or extract_salary_from_structured(
        structured
    )
