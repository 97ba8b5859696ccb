"""Employment history analytics result schemas."""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.resume import WorkEntry

# camelCase on the wire, snake_case in Python
_RESULT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Tenure(BaseModel):
    """Whole years and remaining months."""

    model_config = _RESULT_CONFIG

    years: int = Field(0, ge=0)
    months: int = Field(0, ge=0)


class Duration(Tenure):
    """Tenure with the day count it was derived from."""

    total_days: int = Field(0, ge=0)


class GapRecord(BaseModel):
    """Unemployment span between two chronologically adjacent roles."""

    model_config = _RESULT_CONFIG

    from_job: str
    to_job: str
    from_date: date
    to_date: date
    days: int


class OverlapRecord(BaseModel):
    """Two adjacent roles whose date ranges genuinely intersect."""

    model_config = _RESULT_CONFIG

    job1: str
    job2: str
    days: int


class EmploymentTimeline(BaseModel):
    """Gap/overlap report in chronological scan order."""

    model_config = _RESULT_CONFIG

    gaps: List[GapRecord] = Field(default_factory=list)
    overlaps: List[OverlapRecord] = Field(default_factory=list)
    position_count: int = 0
    current_position_count: int = 0


class JobSummary(BaseModel):
    """Per-entry view used for job cards."""

    model_config = _RESULT_CONFIG

    title: str
    company: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[str] = None
    start_date: date
    end_date: date
    experience: Duration
    is_current: bool = False
    is_trainee: bool = False
    has_date_issue: bool = Field(
        False,
        description="Start date is not before end date",
    )


class ExperienceReport(BaseModel):
    """All four analytics outputs for one work history."""

    model_config = _RESULT_CONFIG

    total_experience: Duration
    average_tenure: Duration
    average_company_tenure: Tenure
    timeline: EmploymentTimeline
    jobs: List[JobSummary] = Field(default_factory=list)


class WorkHistoryRequest(BaseModel):
    """Request body carrying a parsed work history."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    work_history: List[WorkEntry] = Field(default_factory=list, alias="workHistory")
    exclude_trainee_from_gaps: Optional[bool] = Field(
        None,
        alias="excludeTraineeFromGaps",
        description="Overrides the configured default when set",
    )

    @field_validator("work_history", mode="before")
    @classmethod
    def list_of_objects(cls, v: Any) -> List[Dict[str, Any]]:
        """Non-list histories are empty; non-object entries are dropped."""
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]


class TenureResponse(BaseModel):
    """Average tenure per role and per company."""

    role: Duration
    company: Tenure
