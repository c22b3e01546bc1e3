"""Data models for the normalization layer.

This module defines the normalization modes, the result of normalizing a
single posting, and the aggregate result of a batch.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from jobclean.domain.models import Job, RawPosting


class NormalizationMode(str, Enum):
    """Which upstream response a posting came from.

    Listings and details differ in the text used for a missing description
    and in which optional fields they carry.
    """

    LISTING = "listing"
    DETAIL = "detail"

    @property
    def fallback_description(self) -> str:
        """Text cleaned in place of a missing description."""
        return MISSING_DESCRIPTION_FALLBACKS[self]


MISSING_DESCRIPTION_FALLBACKS = {
    NormalizationMode.LISTING: "No description available",
    NormalizationMode.DETAIL: "",
}


@dataclass
class NormalizationResult:
    """Result of normalizing a single RawPosting.

    Attributes:
        job: Normalized Job with cleaned description and derived salary
        raw_posting: Original posting (preserved for debugging)
        mode: Listing or detail normalization
        description_missing: True if the posting had no description
    """

    job: Job
    raw_posting: RawPosting
    mode: NormalizationMode
    description_missing: bool = False

    @property
    def has_salary(self) -> bool:
        """Whether a salary range could be derived."""
        return self.job.salary is not None


@dataclass
class BatchResult:
    """Aggregate result of normalizing a batch of postings.

    Attributes:
        results: Successful results, in input order
        received: Number of records in the batch
        filtered_out: Listings dropped for a too-short description
        failed_ids: IDs (or positions) of records that failed validation or normalization
    """

    results: List[NormalizationResult] = field(default_factory=list)
    received: int = 0
    filtered_out: int = 0
    failed_ids: List[str] = field(default_factory=list)

    @property
    def jobs(self) -> List[Job]:
        return [result.job for result in self.results]

    @property
    def failed_count(self) -> int:
        return len(self.failed_ids)

    def estimated_total(self, upstream_total: int) -> int:
        """Scale an upstream result count by the share of postings kept.

        The backend reports how many postings match in total, but some of
        them will be filtered out here. The estimate applies this batch's
        keep ratio to the upstream total.

        Args:
            upstream_total: Total count reported by the job-search backend

        Returns:
            Estimated number of displayable postings, or the number kept
            when the estimate rounds down to zero
        """
        kept = len(self.results)
        if self.received == 0:
            return kept
        estimate = math.floor(upstream_total * kept / self.received)
        return estimate or kept
