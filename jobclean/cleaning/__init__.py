"""Cleaning of raw, scraped job descriptions into display-ready markdown."""

from .entities import decode_entities
from .pipeline import CLEANING_STAGES, DescriptionCleaner, StageFailure, clean_description

__all__ = [
    "CLEANING_STAGES",
    "DescriptionCleaner",
    "StageFailure",
    "clean_description",
    "decode_entities",
]
