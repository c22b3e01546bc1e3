"""Normalization layer converting raw postings to cleaned Job models.

This module provides:
- NormalizationMode: listing vs detail semantics
- NormalizationResult: output of normalizing one posting
- BatchResult: output of normalizing a batch
- JobNormalizer: service to convert RawPosting to Job and JobCard
"""

from .models import BatchResult, NormalizationMode, NormalizationResult
from .service import JobNormalizer

__all__ = [
    "JobNormalizer",
    "NormalizationMode",
    "NormalizationResult",
    "BatchResult",
]
