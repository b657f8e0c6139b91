#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching and ranking.

Inputs (StudentProfile, ScholarshipCriteria, ApplicationProfile) coerce
form-style values on the way in: GPA, slot counts and limits arrive as
strings from assessments and scholarship forms and anything non-numeric
becomes 0. Outputs (MatchResult, RankResult) are the shapes returned by both
the model path and the fallback path.
"""

from enum import Enum
from typing import List, Optional, Literal

from pydantic import BaseModel, Field, field_validator

from core.utils import safe_float, clamp, as_str_list


class Recommendation(str, Enum):
    """Recommendation tier for a student x scholarship match, lowest first."""
    NOT_RECOMMENDED = "Not Recommended"
    CONSIDER = "Consider"
    RECOMMENDED = "Recommended"
    HIGHLY_RECOMMENDED = "Highly Recommended"


class ResultSource(str, Enum):
    """Provenance tag: external model or deterministic fallback."""
    AI = "ai"
    FALLBACK = "fallback"


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


# =============================================================================
# INPUTS
# =============================================================================

class StudentProfile(BaseModel):
    """Assessment snapshot of one student."""
    student_id: Optional[str] = None
    full_name: str = ""
    course: str = ""
    year_level: str = ""
    gpa: float = 0.0
    income_range: str = ""
    skills: str = ""
    involvement: str = ""
    scholarship_type: str = ""
    essay: str = ""

    @field_validator("gpa", mode="before")
    @classmethod
    def _coerce_gpa(cls, value):
        return safe_float(value)

    @field_validator(
        "full_name", "course", "year_level", "income_range", "skills",
        "involvement", "scholarship_type", "essay", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value):
        if isinstance(value, (list, tuple)):
            return ", ".join(as_str_list(value))
        return _text(value)


class ScholarshipCriteria(BaseModel):
    """Selection criteria and slot counts of one scholarship."""
    id: str
    name: str = ""
    organization: str = ""
    scholarship_type: str = ""
    min_gpa: float = 0.0
    eligible_courses: List[str] = Field(default_factory=list)
    eligible_year_levels: List[str] = Field(default_factory=list)
    income_limit: Optional[float] = None
    required_skills: List[str] = Field(default_factory=list)
    slots_total: int = 0
    slots_filled: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return _text(value)

    @field_validator("name", "organization", "scholarship_type", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _text(value)

    @field_validator("min_gpa", mode="before")
    @classmethod
    def _coerce_min_gpa(cls, value):
        return safe_float(value)

    @field_validator("income_limit", mode="before")
    @classmethod
    def _coerce_income_limit(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return safe_float(value)

    @field_validator("slots_total", "slots_filled", mode="before")
    @classmethod
    def _coerce_slots(cls, value):
        return max(0, int(safe_float(value)))

    @field_validator("eligible_courses", "eligible_year_levels", "required_skills", mode="before")
    @classmethod
    def _coerce_lists(cls, value):
        return as_str_list(value)

    @property
    def slots_remaining(self) -> int:
        return int(clamp(self.slots_total - self.slots_filled, 0, self.slots_total))


class ApplicationProfile(BaseModel):
    """Applicant snapshot used when a sponsor ranks applications."""
    id: str
    student_name: str = ""
    course: str = ""
    year_level: str = ""
    gpa: float = 0.0
    income_range: str = ""
    skills: str = ""
    application_letter: str = ""
    involvement: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return _text(value)

    @field_validator("gpa", mode="before")
    @classmethod
    def _coerce_gpa(cls, value):
        return safe_float(value)

    @field_validator(
        "student_name", "course", "year_level", "income_range", "skills",
        "application_letter", "involvement", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value):
        if isinstance(value, (list, tuple)):
            return ", ".join(as_str_list(value))
        return _text(value)


# =============================================================================
# OUTPUTS
# =============================================================================

class MatchDetails(BaseModel):
    """Which criteria a student meets for one scholarship."""
    gpa_match: bool = True
    course_match: bool = True
    year_level_match: bool = True
    income_match: bool = True
    skills_match: bool = True


class WhyMatchedReason(BaseModel):
    type: Literal["positive", "negative"]
    text: str


class MatchResult(BaseModel):
    """One student x scholarship match."""
    scholarship_id: str
    scholarship_name: str = ""
    match_score: float = Field(ge=0, le=100)
    eligible: bool
    match_details: MatchDetails = Field(default_factory=MatchDetails)
    explanation: str = ""
    why_matched: List[WhyMatchedReason] = Field(default_factory=list)
    recommendation: Recommendation
    source: ResultSource

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        return clamp(safe_float(value))


class ScoreBreakdown(BaseModel):
    """Per-dimension applicant scores, each 0-100."""
    academic_score: float = Field(default=0.0, ge=0, le=100)
    financial_need_score: float = Field(default=50.0, ge=0, le=100)
    skills_score: float = Field(default=50.0, ge=0, le=100)
    essay_score: float = Field(default=50.0, ge=0, le=100)
    overall_fit_score: float = Field(default=0.0, ge=0, le=100)

    @field_validator(
        "academic_score", "financial_need_score", "skills_score",
        "essay_score", "overall_fit_score", mode="before"
    )
    @classmethod
    def _clamp_scores(cls, value):
        return clamp(safe_float(value))


class RankResult(BaseModel):
    """One application's position within a ranking run."""
    application_id: str
    student_name: str = ""
    rank_score: float = Field(ge=0, le=100)
    rank: int = 0
    eligible: bool
    score_breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendation: str = ""
    source: ResultSource

    @field_validator("rank_score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        return clamp(safe_float(value))
