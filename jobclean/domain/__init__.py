"""Domain models for the job description cleaner."""

from .models import Job, JobCard, RawPosting, SalaryRange, StructuredSalary

__all__ = ["RawPosting", "StructuredSalary", "SalaryRange", "Job", "JobCard"]
