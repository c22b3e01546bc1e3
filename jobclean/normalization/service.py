"""Job normalization service for converting RawPosting to Job domain models.

This module implements the normalization logic that:
1. Cleans the raw description (with the mode's fallback for a missing one)
2. Derives a yearly salary from the cleaned text or the structured salary
3. Fills defaults for location, posting date and keywords
4. Builds JobCards with a bounded preview for list views
5. Filters and normalizes whole batches on a thread pool
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from jobclean.cleaning import DescriptionCleaner
from jobclean.config.models import AppConfig
from jobclean.domain.models import DEFAULT_LOCATION, Job, JobCard, RawPosting
from jobclean.logging import get_logger
from jobclean.logging.context import log_context
from jobclean.preview import DEFAULT_PREVIEW_LENGTH, build_preview
from jobclean.salary import derive_salary
from jobclean.utils.timestamps import normalize_posted_date

from .models import BatchResult, NormalizationMode, NormalizationResult

logger = get_logger(__name__, component="normalization")

RawRecord = Union[RawPosting, Dict[str, Any]]


class JobNormalizer:
    """Normalizes RawPosting instances into Job and JobCard models.

    Responsibilities:
    - Clean descriptions through the cleaning pipeline
    - Derive salary ranges (description first, structured data second)
    - Apply listing/detail defaults
    - Build previews for job cards
    - Filter and normalize batches, logging and skipping bad records
    """

    def __init__(
        self,
        cleaner: Optional[DescriptionCleaner] = None,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
        min_description_length: int = 50,
        max_workers: int = 4,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize JobNormalizer.

        Args:
            cleaner: Description cleaner (defaults to an uncached cleaner)
            preview_length: Maximum preview length for job cards
            min_description_length: Listings with a shorter trimmed description are dropped
            max_workers: Thread pool size for process_batch
            logger_instance: Logger instance (defaults to module logger)
        """
        self.cleaner = cleaner or DescriptionCleaner()
        self.preview_length = preview_length
        self.min_description_length = min_description_length
        self.max_workers = max_workers
        self.logger = logger_instance or logger

    @classmethod
    def from_config(cls, config: AppConfig) -> "JobNormalizer":
        """Build a normalizer from application configuration.

        Args:
            config: Validated application configuration

        Returns:
            JobNormalizer with a cache sized per config.cleaning.cache_size
        """
        return cls(
            cleaner=DescriptionCleaner(cache_size=config.cleaning.cache_size),
            preview_length=config.preview.max_length,
            min_description_length=config.batch.min_description_length,
            max_workers=config.batch.max_workers,
        )

    def normalize(
        self, raw: RawPosting, mode: NormalizationMode = NormalizationMode.LISTING
    ) -> NormalizationResult:
        """Normalize a single RawPosting into a Job.

        Args:
            raw: Posting from the job-search backend
            mode: Listing or detail normalization

        Returns:
            NormalizationResult with the normalized Job
        """
        mode = NormalizationMode(mode)
        description_missing = not raw.description

        if description_missing:
            self.logger.warning(
                f"Missing description for job {raw.job_id}",
                extra={
                    "event": "normalization.job.missing_description",
                    "job_id": raw.job_id,
                    "mode": mode.value,
                },
            )

        description = self.cleaner.clean(raw.description or mode.fallback_description)
        salary = derive_salary(description, raw.salary_range)

        is_detail = mode is NormalizationMode.DETAIL
        job = Job(
            id=raw.job_id,
            title=self._sanitize_text(raw.title),
            company=self._sanitize_text(raw.company),
            location=raw.location or DEFAULT_LOCATION,
            description=description,
            application_url=raw.application_url,
            salary=salary,
            job_type=raw.job_type if is_detail else None,
            experience_level=raw.experience_level if is_detail else None,
            posted_date=normalize_posted_date(raw.posted_date),
            tech_keywords=list(raw.tech_keywords or []),
            remote=raw.is_remote,
            source=raw.source,
        )

        self.logger.info(
            "Normalized job",
            extra={
                "event": "normalization.job.normalized",
                "job_id": job.id,
                "mode": mode.value,
                "company": job.company,
                "title": job.title,
                "has_salary": salary is not None,
                "description_length": len(description),
            },
        )

        return NormalizationResult(
            job=job,
            raw_posting=raw,
            mode=mode,
            description_missing=description_missing,
        )

    def normalize_listing(self, raw: RawPosting) -> Job:
        """Normalize a posting from a search listing."""
        return self.normalize(raw, NormalizationMode.LISTING).job

    def normalize_detail(self, raw: RawPosting) -> Job:
        """Normalize a posting from a job detail response."""
        return self.normalize(raw, NormalizationMode.DETAIL).job

    def to_card(self, job: Job) -> JobCard:
        """Attach a plain-text preview to a job for list views.

        Args:
            job: Normalized job

        Returns:
            JobCard with the preview of the cleaned description
        """
        return JobCard(**job.model_dump(), preview=build_preview(job.description, self.preview_length))

    def filter_listings(self, postings: Iterable[RawPosting]) -> List[RawPosting]:
        """Drop listings without a meaningful description.

        Args:
            postings: Raw listing postings

        Returns:
            Postings whose trimmed description has at least min_description_length characters
        """
        return [
            posting
            for posting in postings
            if posting.description
            and len(posting.description.strip()) >= self.min_description_length
        ]

    def process_batch(
        self,
        records: Sequence[RawRecord],
        mode: NormalizationMode = NormalizationMode.LISTING,
    ) -> BatchResult:
        """Validate, filter and normalize a batch of records.

        Records may be RawPosting instances or plain dicts. Invalid records
        and records that fail to normalize are logged and skipped. Listings
        are filtered by description length before cleaning. Results keep the
        input order.

        Args:
            records: Raw records from the job-search backend
            mode: Listing or detail normalization

        Returns:
            BatchResult with the normalized results and batch counters
        """
        mode = NormalizationMode(mode)
        batch = BatchResult(received=len(records))

        postings: List[RawPosting] = []
        for position, record in enumerate(records):
            try:
                postings.append(
                    record if isinstance(record, RawPosting) else RawPosting.model_validate(record)
                )
            except ValidationError as e:
                record_id = self._record_id(record, position)
                self.logger.error(
                    f"Invalid job record {record_id}: {e.error_count()} validation error(s)",
                    extra={
                        "event": "normalization.job.invalid",
                        "job_id": record_id,
                        "error": str(e),
                    },
                )
                batch.failed_ids.append(record_id)

        if mode is NormalizationMode.LISTING:
            kept = self.filter_listings(postings)
            batch.filtered_out = len(postings) - len(kept)
            postings = kept

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            outcomes = list(executor.map(lambda raw: self._normalize_safely(raw, mode), postings))

        for raw, outcome in zip(postings, outcomes):
            if outcome is None:
                batch.failed_ids.append(raw.job_id)
            else:
                batch.results.append(outcome)

        self.logger.info(
            f"Normalized {len(batch.results)} of {batch.received} jobs",
            extra={
                "event": "normalization.batch.completed",
                "mode": mode.value,
                "received": batch.received,
                "normalized": len(batch.results),
                "filtered_out": batch.filtered_out,
                "failed": batch.failed_count,
            },
        )
        return batch

    def _normalize_safely(
        self, raw: RawPosting, mode: NormalizationMode
    ) -> Optional[NormalizationResult]:
        # Runs on a worker thread; context vars do not carry over from the caller
        with log_context(job_id=raw.job_id, mode=mode.value):
            try:
                return self.normalize(raw, mode)
            except Exception as e:
                self.logger.error(
                    f"Error normalizing job {raw.job_id}: {e}",
                    extra={"event": "normalization.job.failed", "error_type": type(e).__name__},
                    exc_info=True,
                )
                return None

    @staticmethod
    def _record_id(record: RawRecord, position: int) -> str:
        if isinstance(record, dict) and record.get("job_id"):
            return str(record["job_id"])
        return f"#{position}"

    @staticmethod
    def _sanitize_text(text: str) -> str:
        """Trim and collapse whitespace in a short text field."""
        return re.sub(r"\s+", " ", text.strip())
