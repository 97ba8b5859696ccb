"""Schemas module initialization."""

from app.schemas.resume import (
    ParsedResume,
    WorkEntry,
    EducationEntry,
    SocialLinks,
    parse_llm_output,
)
from app.schemas.experience import (
    Tenure,
    Duration,
    GapRecord,
    OverlapRecord,
    EmploymentTimeline,
    JobSummary,
    ExperienceReport,
)

__all__ = [
    "ParsedResume",
    "WorkEntry",
    "EducationEntry",
    "SocialLinks",
    "parse_llm_output",
    "Tenure",
    "Duration",
    "GapRecord",
    "OverlapRecord",
    "EmploymentTimeline",
    "JobSummary",
    "ExperienceReport",
]
