"""Core domain models for postings, salaries, and cleaned jobs.

This module defines the data structures used throughout the application:
- RawPosting: job record as received from the job-search backend
- StructuredSalary: salary block attached to a raw posting
- SalaryRange: derived yearly salary range
- Job: normalized job with a cleaned description
- JobCard: job plus a plain-text preview for list views
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_LOCATION = "Not specified"


class StructuredSalary(BaseModel):
    """Salary block provided by the upstream board.

    Any of min, max and period may be missing. The period is free text
    ("hourly", "per hour", "yearly", ...) and is interpreted by the salary
    extractor, not validated here.
    """

    min: Optional[float] = Field(None, description="Lower bound in the posting's period")
    max: Optional[float] = Field(None, description="Upper bound in the posting's period")
    currency: Optional[str] = Field(None, description="ISO currency code")
    period: Optional[str] = Field(None, description="Pay period as reported upstream")


class RawPosting(BaseModel):
    """Job record from the job-search backend before cleaning.

    Listing and detail responses share this shape. The detail-only fields
    (company_url, job_type, experience_level) are absent on listings.
    """

    job_id: str = Field(..., description="Job ID from the job board")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: Optional[str] = Field(None, description="Job location")
    description: Optional[str] = Field(None, description="Raw description text")
    application_url: str = Field("", description="Link to apply")
    posted_date: Optional[str] = Field(None, description="When the job was posted")
    salary_range: Optional[StructuredSalary] = Field(None, description="Structured salary")
    is_remote: bool = Field(False, description="Whether the job is remote")
    tech_keywords: Optional[List[str]] = Field(None, description="Technologies mentioned")
    source: str = Field("unknown", description="Job board the posting came from")
    company_url: Optional[str] = Field(None, description="Company website (detail only)")
    job_type: Optional[str] = Field(None, description="Employment type (detail only)")
    experience_level: Optional[str] = Field(None, description="Seniority (detail only)")

    @field_validator("job_id", "title", "company")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from location field."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    model_config = {"json_schema_extra": {"example": {
        "job_id": "li-4012345",
        "title": "Senior Software Engineer",
        "company": "Example Corp",
        "location": "Remote",
        "description": "<p>We are looking for a <b>talented</b> engineer...</p>",
        "application_url": "https://example.com/jobs/4012345",
        "posted_date": "2025-11-01",
        "salary_range": {"min": 60, "max": 75, "currency": "USD", "period": "hourly"},
        "is_remote": True,
        "tech_keywords": ["python", "aws"],
        "source": "linkedin",
    }}}


class SalaryRange(BaseModel):
    """Yearly salary range derived from a description or structured salary.

    Hourly figures are annualized before a SalaryRange is built, so the
    period is always "yearly".
    """

    min: Optional[int] = Field(None, description="Lower bound per year")
    max: Optional[int] = Field(None, description="Upper bound per year")
    currency: str = Field("USD", description="ISO currency code")
    period: Literal["yearly"] = "yearly"

    @model_validator(mode="after")
    def validate_bounds(self) -> "SalaryRange":
        """Ensure min <= max when both bounds are present."""
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")
        return self


class Job(BaseModel):
    """Normalized job posting with a cleaned description.

    This is the record handed to downstream views. The description is the
    output of the cleaning pipeline and salary is derived from it (falling
    back to the structured salary).
    """

    id: str = Field(..., description="Job ID from the job board")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: str = Field(DEFAULT_LOCATION, description="Job location")
    description: str = Field(..., description="Cleaned description")
    application_url: str = Field("", description="Link to apply")
    salary: Optional[SalaryRange] = Field(None, description="Derived yearly salary")
    job_type: Optional[str] = Field(None, description="Employment type (detail only)")
    experience_level: Optional[str] = Field(None, description="Seniority (detail only)")
    posted_date: str = Field(..., description="ISO 8601 posting date (UTC)")
    tech_keywords: List[str] = Field(default_factory=list, description="Technologies mentioned")
    remote: bool = Field(False, description="Whether the job is remote")
    source: str = Field(..., description="Job board the posting came from")


class JobCard(Job):
    """Job with a bounded plain-text preview for list and card views."""

    preview: str = Field("", description="Plain-text preview of the description")
