"""Unit tests for the normalization layer.

Tests the JobNormalizer service and data models for:
- Listing vs detail semantics and missing-description fallbacks
- Defaults for location, posting date and keywords
- Salary derivation from cleaned text and structured data
- Job cards with previews
- Batch filtering, validation failures and estimated totals
"""

import pytest

from jobclean.cleaning import DescriptionCleaner
from jobclean.config.models import AppConfig
from jobclean.domain.models import JobCard, RawPosting, StructuredSalary
from jobclean.normalization import (
    BatchResult,
    JobNormalizer,
    NormalizationMode,
    NormalizationResult,
)
from jobclean.utils.timestamps import parse_iso_datetime

LONG_DESCRIPTION = (
    "<p>We are looking for a <b>Senior</b> engineer to build our data platform.</p>"
    "<p>Responsibilities:</p>"
    "• Design services<br>• Review code"
)


@pytest.fixture
def raw_posting():
    """Create a test RawPosting."""
    return RawPosting(
        job_id="li-4012345",
        title="  Senior   Software Engineer ",
        company="Example Corp",
        location="Remote",
        description=LONG_DESCRIPTION,
        application_url="https://example.com/jobs/4012345",
        posted_date="2025-11-01",
        salary_range=StructuredSalary(min=60, max=75, currency="USD", period="hourly"),
        is_remote=True,
        tech_keywords=["python", "aws"],
        source="linkedin",
        job_type="Full-time",
        experience_level="Senior",
    )


@pytest.fixture
def normalizer():
    """Create a JobNormalizer instance."""
    return JobNormalizer()


def _record(job_id, description, **overrides):
    record = {
        "job_id": job_id,
        "title": "Engineer",
        "company": "Acme",
        "description": description,
        "source": "indeed",
    }
    record.update(overrides)
    return record


class TestNormalizationModels:
    """Tests for NormalizationMode, NormalizationResult and BatchResult."""

    def test_mode_fallbacks(self):
        """Test the missing-description text for each mode."""
        assert NormalizationMode.LISTING.fallback_description == "No description available"
        assert NormalizationMode.DETAIL.fallback_description == ""

    def test_mode_from_string(self):
        """Test modes can be built from their values."""
        assert NormalizationMode("detail") is NormalizationMode.DETAIL

    def test_estimated_total_scales_by_keep_ratio(self, normalizer, raw_posting):
        """Test the upstream total is scaled by kept / received."""
        result = normalizer.normalize(raw_posting)
        batch = BatchResult(results=[result, result], received=4)

        assert batch.estimated_total(100) == 50

    def test_estimated_total_never_rounds_to_zero(self, normalizer, raw_posting):
        """Test an estimate of zero falls back to the kept count."""
        result = normalizer.normalize(raw_posting)
        batch = BatchResult(results=[result], received=3)

        assert batch.estimated_total(2) == 1

    def test_estimated_total_empty_batch(self):
        """Test an empty batch reports zero."""
        assert BatchResult().estimated_total(500) == 0


class TestJobNormalizerNormalize:
    """Tests for JobNormalizer.normalize."""

    def test_listing_normalization(self, normalizer, raw_posting):
        """Test a listing is cleaned and mapped onto Job."""
        result = normalizer.normalize(raw_posting, NormalizationMode.LISTING)
        job = result.job

        assert isinstance(result, NormalizationResult)
        assert result.description_missing is False
        assert job.id == "li-4012345"
        assert job.title == "Senior Software Engineer"
        assert job.company == "Example Corp"
        assert job.location == "Remote"
        assert job.remote is True
        assert job.source == "linkedin"
        assert job.tech_keywords == ["python", "aws"]
        assert job.posted_date == "2025-11-01T00:00:00Z"
        assert "<" not in job.description
        assert "## Responsibilities" in job.description
        assert "* Design services\n* Review code" in job.description

    def test_listing_omits_detail_fields(self, normalizer, raw_posting):
        """Test job_type and experience_level are detail-only."""
        job = normalizer.normalize_listing(raw_posting)
        assert job.job_type is None
        assert job.experience_level is None

    def test_detail_keeps_detail_fields(self, normalizer, raw_posting):
        """Test detail normalization keeps job_type and experience_level."""
        job = normalizer.normalize_detail(raw_posting)
        assert job.job_type == "Full-time"
        assert job.experience_level == "Senior"

    def test_structured_salary_fallback(self, normalizer, raw_posting):
        """Test the structured hourly salary is annualized when the text has none."""
        job = normalizer.normalize_listing(raw_posting)
        assert (job.salary.min, job.salary.max) == (115200, 144000)

    def test_description_salary_preferred(self, normalizer, raw_posting):
        """Test a salary in the description beats the structured one."""
        raw = raw_posting.model_copy(
            update={"description": "Base salary of $150,000 - $180,000 plus equity."}
        )
        job = normalizer.normalize_listing(raw)
        assert (job.salary.min, job.salary.max) == (150000, 180000)

    def test_missing_description_listing(self, normalizer):
        """Test a listing without a description gets the listing fallback."""
        raw = RawPosting(job_id="li-1", title="Engineer", company="Acme")
        result = normalizer.normalize(raw, NormalizationMode.LISTING)

        assert result.description_missing is True
        assert result.job.description == "No description available"

    def test_missing_description_detail(self, normalizer):
        """Test a detail without a description gets an empty description."""
        raw = RawPosting(job_id="li-1", title="Engineer", company="Acme", description="")
        result = normalizer.normalize(raw, NormalizationMode.DETAIL)

        assert result.description_missing is True
        assert result.job.description == ""
        assert result.has_salary is False

    def test_defaults_for_missing_fields(self, normalizer):
        """Test location, posted date and keyword defaults."""
        raw = RawPosting(job_id="li-1", title="Engineer", company="Acme")
        job = normalizer.normalize_listing(raw)

        assert job.location == "Not specified"
        assert job.tech_keywords == []
        assert job.posted_date.endswith("Z")
        assert parse_iso_datetime(job.posted_date) is not None

    def test_unparseable_posted_date_kept(self, normalizer):
        """Test a posted date that cannot be parsed is passed through."""
        raw = RawPosting(job_id="li-1", title="Engineer", company="Acme", posted_date=" 3 days ago ")
        assert normalizer.normalize_listing(raw).posted_date == "3 days ago"


class TestJobCards:
    """Tests for JobNormalizer.to_card."""

    def test_card_has_preview(self, normalizer, raw_posting):
        """Test the card carries the plain-text preview."""
        job = normalizer.normalize_listing(raw_posting)
        card = normalizer.to_card(job)

        assert isinstance(card, JobCard)
        assert card.id == job.id
        assert card.description == job.description
        assert card.preview.startswith("We are looking for a Senior engineer")
        assert "##" not in card.preview
        assert "\n" not in card.preview

    def test_preview_length_respected(self, raw_posting):
        """Test the configured preview length bounds the preview."""
        normalizer = JobNormalizer(preview_length=30)
        card = normalizer.to_card(normalizer.normalize_listing(raw_posting))
        assert len(card.preview) <= 33


class TestFilterListings:
    """Tests for JobNormalizer.filter_listings."""

    def test_short_and_missing_descriptions_dropped(self, normalizer):
        """Test listings below the minimum trimmed length are dropped."""
        keep = RawPosting(job_id="1", title="T", company="C", description="x" * 50)
        short = RawPosting(job_id="2", title="T", company="C", description="  " + "x" * 49 + "  ")
        missing = RawPosting(job_id="3", title="T", company="C")

        assert normalizer.filter_listings([keep, short, missing]) == [keep]

    def test_custom_minimum(self):
        """Test a custom minimum description length."""
        normalizer = JobNormalizer(min_description_length=5)
        posting = RawPosting(job_id="1", title="T", company="C", description="Short")
        assert normalizer.filter_listings([posting]) == [posting]


class TestProcessBatch:
    """Tests for JobNormalizer.process_batch."""

    def test_listing_batch(self, normalizer, raw_posting):
        """Test validation failures, filtering and ordering in a listing batch."""
        records = [
            _record("a-1", LONG_DESCRIPTION),
            _record("a-2", "Too short"),
            {"job_id": "bad-1", "company": "Acme"},
            raw_posting,
        ]

        batch = normalizer.process_batch(records, NormalizationMode.LISTING)

        assert batch.received == 4
        assert batch.filtered_out == 1
        assert batch.failed_ids == ["bad-1"]
        assert [job.id for job in batch.jobs] == ["a-1", "li-4012345"]

    def test_detail_batch_does_not_filter(self, normalizer):
        """Test short descriptions are kept in detail mode."""
        batch = normalizer.process_batch([_record("d-1", "Too short")], NormalizationMode.DETAIL)

        assert batch.filtered_out == 0
        assert [job.id for job in batch.jobs] == ["d-1"]
        assert batch.jobs[0].description == "Too short"

    def test_invalid_record_without_id(self, normalizer):
        """Test invalid records without a job_id are reported by position."""
        batch = normalizer.process_batch([{"title": "No id"}])
        assert batch.failed_ids == ["#0"]
        assert batch.failed_count == 1

    def test_normalization_failure_is_isolated(self):
        """Test a record that fails to normalize is reported and skipped."""

        class FlakyCleaner(DescriptionCleaner):
            def clean(self, raw_description):
                if "explode" in (raw_description or ""):
                    raise RuntimeError("boom")
                return super().clean(raw_description)

        normalizer = JobNormalizer(cleaner=FlakyCleaner(), min_description_length=0)
        batch = normalizer.process_batch(
            [_record("ok-1", "Fine text."), _record("bad-2", "please explode")]
        )

        assert [job.id for job in batch.jobs] == ["ok-1"]
        assert batch.failed_ids == ["bad-2"]

    def test_empty_batch(self, normalizer):
        """Test an empty batch."""
        batch = normalizer.process_batch([])
        assert batch.received == 0
        assert batch.jobs == []


class TestFromConfig:
    """Tests for JobNormalizer.from_config."""

    def test_uses_config_values(self):
        """Test preview, batch and cache settings come from config."""
        config = AppConfig.model_validate(
            {
                "cleaning": {"cache_size": 16},
                "preview": {"max_length": 120},
                "batch": {"max_workers": 2, "min_description_length": 10},
            }
        )
        normalizer = JobNormalizer.from_config(config)

        assert normalizer.preview_length == 120
        assert normalizer.max_workers == 2
        assert normalizer.min_description_length == 10
        assert normalizer.cleaner.cache_size == 16
