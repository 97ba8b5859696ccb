"""
Pydantic V2 schema for the resume JSON produced by the LLM parsing pipeline.

The LLM is treated as ground truth for which fields exist. These models only
make the document safe to analyze:
- Missing or malformed fields become absent instead of failing validation
- Field names follow the LLM output (snake_case entries, camelCase document)
- Markdown code fences around the LLM content are stripped before decoding
"""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_CODE_FENCE_OPEN = re.compile(r"^```(\w+)?\n")
_CODE_FENCE_CLOSE = re.compile(r"\n```$")

_TRUE_STRINGS = {"true", "yes", "y", "1"}


class SocialLinks(BaseModel):
    """Social media and professional links."""

    model_config = ConfigDict(extra="ignore")

    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    xing: Optional[str] = None


class WorkEntry(BaseModel):
    """One role from the parsed work history."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str = ""
    company_name: Optional[str] = Field(None, alias="work_company_name")
    start_date: Optional[str] = Field(None, alias="work_start_date")
    end_date: Optional[str] = Field(
        None, alias="work_end_date", description="Free text, e.g. 'Present'"
    )
    is_currently_working: bool = False
    description: Optional[str] = Field(None, alias="work_description")
    employment_type: Optional[str] = None
    work_location: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def normalize_title(cls, v: Any) -> str:
        """Missing or non-text titles become empty."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        return ""

    @field_validator(
        "company_name",
        "description",
        "employment_type",
        "work_location",
        mode="before",
    )
    @classmethod
    def text_or_none(cls, v: Any) -> Optional[str]:
        """Non-text values are treated as absent."""
        if isinstance(v, str) and v.strip():
            return v
        return None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def date_text_or_none(cls, v: Any) -> Optional[str]:
        """Keep dates as free text; bare years like 2020 become '2020'."""
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip() or None
        return None

    @field_validator("is_currently_working", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        """Accept booleans and common truthy strings; anything else is False."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        if isinstance(v, int):
            return v == 1
        return False


class EducationEntry(BaseModel):
    """One entry from the parsed education history."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    institute_name: Optional[str] = None
    educational_qualification: Optional[str] = None
    educational_specialization: Optional[str] = None
    grade: Optional[str] = None
    education_location: Optional[str] = None
    education_start_date: Optional[str] = None
    education_end_date: Optional[str] = None
    education_description: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Optional[str]:
        """Numbers (grades, years) are kept as text; other shapes are dropped."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, str):
            return v
        return None


class ParsedResume(BaseModel):
    """
    Resume document as returned by the LLM.

    Only `work_history` feeds the analytics; the remaining fields are kept so
    the document can be passed through to the presentation layer.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    full_address: Optional[str] = Field(None, alias="fullAddress")
    current_organization: Optional[str] = Field(None, alias="currentOrganization")
    title: Optional[str] = None
    summary: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social_media: SocialLinks = Field(default_factory=SocialLinks, alias="socialMedia")
    work_history: List[WorkEntry] = Field(default_factory=list, alias="workHistory")
    education_history: List[EducationEntry] = Field(
        default_factory=list, alias="educationHistory"
    )

    @field_validator("work_history", "education_history", mode="before")
    @classmethod
    def list_of_objects(cls, v: Any) -> List[Dict[str, Any]]:
        """Non-list histories are empty; non-object entries are dropped."""
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]

    @field_validator("skills", mode="before")
    @classmethod
    def skill_strings(cls, v: Any) -> List[str]:
        """Keep only textual skills."""
        if not isinstance(v, list):
            return []
        return [s for s in v if isinstance(s, str) and s.strip()]

    @field_validator("social_media", mode="before")
    @classmethod
    def social_object(cls, v: Any) -> Dict[str, Any]:
        """Drop non-object social media blocks and non-text links."""
        if not isinstance(v, dict):
            return {}
        return {k: val for k, val in v.items() if isinstance(val, str) and val}

    @field_validator(
        "first_name",
        "last_name",
        "email",
        "phone",
        "city",
        "full_address",
        "current_organization",
        "title",
        "summary",
        mode="before",
    )
    @classmethod
    def optional_text(cls, v: Any) -> Optional[str]:
        """Empty or non-text contact fields are absent."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @property
    def full_name(self) -> str:
        """First and last name joined, skipping missing parts."""
        return " ".join(filter(None, [self.first_name, self.last_name]))


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the LLM added one."""
    if text.startswith("```"):
        return _CODE_FENCE_CLOSE.sub("", _CODE_FENCE_OPEN.sub("", text, count=1))
    return text


def parse_llm_output(text: str) -> ParsedResume:
    """
    Decode the raw LLM message content into a ParsedResume.

    Raises:
        ValueError: If the content is not a JSON object.
    """
    cleaned = strip_code_fences(text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"LLM output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("LLM output must be a JSON object")

    return ParsedResume.model_validate(data)
