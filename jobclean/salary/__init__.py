"""Salary range derivation for job postings."""

from .extractor import (
    derive_salary,
    extract_salary_from_description,
    extract_salary_from_structured,
    parse_amount,
)

__all__ = [
    "derive_salary",
    "extract_salary_from_description",
    "extract_salary_from_structured",
    "parse_amount",
]
