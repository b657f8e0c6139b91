#!/usr/bin/env python3
"""
Prompt/Response Contract - what is sent to the model and what is accepted back.

Matching and ranking replies must be a JSON array with exactly one entry per
input scholarship (or application). Parsing is all-or-nothing: any item that
fails validation, any missing or duplicated id, or text with no extractable
JSON array raises ContractViolation and the caller falls back to the
rule-based engine.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.matcher.models import (
    StudentProfile, ScholarshipCriteria, ApplicationProfile,
    MatchResult, MatchDetails, RankResult, ScoreBreakdown,
    Recommendation, ResultSource
)

logger = logging.getLogger(__name__)


class ContractViolation(Exception):
    """Model reply does not satisfy the response contract."""
    pass


# =============================================================================
# RESPONSE SCHEMAS (camelCase, as requested in the prompts)
# =============================================================================

class _ContractModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MatchDetailsPayload(_ContractModel):
    gpa_match: bool = Field(alias="gpaMatch")
    course_match: bool = Field(alias="courseMatch")
    year_level_match: bool = Field(alias="yearLevelMatch")
    income_match: bool = Field(alias="incomeMatch")
    skills_match: bool = Field(alias="skillsMatch")


class MatchResponseItem(_ContractModel):
    scholarship_id: str = Field(alias="scholarshipId")
    scholarship_name: str = Field(alias="scholarshipName")
    match_score: float = Field(alias="matchScore")
    eligible: bool
    match_details: MatchDetailsPayload = Field(alias="matchDetails")
    explanation: str
    recommendation: Recommendation

    @field_validator("scholarship_id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ScoreBreakdownPayload(_ContractModel):
    academic_score: float = Field(alias="academicScore")
    financial_need_score: float = Field(alias="financialNeedScore")
    skills_score: float = Field(alias="skillsScore")
    essay_score: float = Field(alias="essayScore")
    overall_fit_score: float = Field(alias="overallFitScore")


class RankResponseItem(_ContractModel):
    application_id: str = Field(alias="applicationId")
    student_name: str = Field(alias="studentName")
    rank_score: float = Field(alias="rankScore")
    # Reassigned after sorting; the model's value is never used.
    rank: Optional[Any] = None
    eligible: bool
    score_breakdown: ScoreBreakdownPayload = Field(alias="scoreBreakdown")
    strengths: List[str]
    weaknesses: List[str]
    recommendation: str

    @field_validator("application_id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


# =============================================================================
# PROMPTS
# =============================================================================

MATCH_RESPONSE_EXAMPLE = """[
  {
    "scholarshipId": "id",
    "scholarshipName": "name",
    "matchScore": 85,
    "eligible": true,
    "matchDetails": {
      "gpaMatch": true,
      "courseMatch": true,
      "yearLevelMatch": true,
      "incomeMatch": true,
      "skillsMatch": true
    },
    "explanation": "Brief explanation of why this is a good/poor match for this specific student",
    "recommendation": "Highly Recommended" | "Recommended" | "Consider" | "Not Recommended"
  }
]"""

RANK_RESPONSE_EXAMPLE = """[
  {
    "applicationId": "id",
    "studentName": "name",
    "rankScore": 95,
    "rank": 1,
    "eligible": true,
    "scoreBreakdown": {
      "academicScore": 90,
      "financialNeedScore": 85,
      "skillsScore": 92,
      "essayScore": 88,
      "overallFitScore": 90
    },
    "strengths": ["High GPA", "Relevant skills"],
    "weaknesses": ["No extracurricular activities"],
    "recommendation": "Highly Recommended for Approval"
  }
]"""


def _or(value: Any, default: str) -> Any:
    return value if value not in (None, "", []) else default


def _scholarship_payload(s: ScholarshipCriteria) -> Dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "organization": s.organization,
        "type": s.scholarship_type,
        "minGPA": s.min_gpa,
        "eligibleCourses": s.eligible_courses,
        "eligibleYearLevels": s.eligible_year_levels,
        "incomeLimit": s.income_limit,
        "requiredSkills": s.required_skills,
        "slotsAvailable": s.slots_remaining,
    }


def _application_payload(a: ApplicationProfile) -> Dict[str, Any]:
    return {
        "applicationId": a.id,
        "studentName": a.student_name,
        "course": a.course,
        "yearLevel": a.year_level,
        "gpa": a.gpa,
        "incomeRange": a.income_range,
        "skills": a.skills,
        "applicationLetter": a.application_letter,
        "involvement": a.involvement,
    }


def build_matching_prompt(student: StudentProfile, scholarships: Sequence[ScholarshipCriteria]) -> str:
    """User message asking the model to score the student against every scholarship."""
    payload = json.dumps([_scholarship_payload(s) for s in scholarships], indent=2, ensure_ascii=False)
    return f"""
Student Profile:
- Full Name: {student.full_name}
- Course: {student.course}
- Year Level: {student.year_level}
- GPA: {student.gpa}
- Income Range: {student.income_range}
- Skills: {_or(student.skills, "Not specified")}
- Scholarship Type Preference: {student.scholarship_type}
- Extracurricular Involvement: {_or(student.involvement, "Not specified")}

Available Scholarships:
{payload}

Return a JSON array with the following structure for EVERY scholarship provided (do not skip any):
{MATCH_RESPONSE_EXAMPLE}

IMPORTANT: You MUST include ALL {len(scholarships)} scholarships in your response, even if they are not a perfect match. Sort by matchScore descending."""


def build_ranking_prompt(applications: Sequence[ApplicationProfile], scholarship: ScholarshipCriteria) -> str:
    """User message asking the model to score every applicant for one scholarship."""
    payload = json.dumps([_application_payload(a) for a in applications], indent=2, ensure_ascii=False)
    income_limit = scholarship.income_limit if scholarship.income_limit is not None else "No limit"
    return f"""
Scholarship Details:
- Name: {scholarship.name}
- Type: {scholarship.scholarship_type}
- Organization: {scholarship.organization}
- Required GPA: {scholarship.min_gpa}
- Eligible Courses: {_or(", ".join(scholarship.eligible_courses), "All")}
- Eligible Year Levels: {_or(", ".join(scholarship.eligible_year_levels), "All")}
- Income Limit: {income_limit}
- Required Skills: {_or(", ".join(scholarship.required_skills), "None specified")}
- Available Slots: {scholarship.slots_remaining}

Applicants:
{payload}

Return a JSON array ranked from highest to lowest score, one entry per applicant:
{RANK_RESPONSE_EXAMPLE}"""


def build_explanation_prompt(student: StudentProfile, scholarship: ScholarshipCriteria) -> str:
    """User message asking for a short fit explanation for one pair."""
    return f"""
Student: {student.full_name}
- Course: {student.course}
- Year: {student.year_level}
- GPA: {student.gpa}
- Income Range: {student.income_range}
- Skills: {_or(student.skills, "Not specified")}

Scholarship: {scholarship.name}
- Type: {scholarship.scholarship_type}
- Required GPA: {scholarship.min_gpa}
- Eligible Courses: {_or(", ".join(scholarship.eligible_courses), "All")}
- Required Skills: {_or(", ".join(scholarship.required_skills), "None")}

Provide a 2-3 sentence explanation of whether this scholarship is a good fit and why."""


# =============================================================================
# PARSING
# =============================================================================

def _bracket_matched_end(text: str, start: int) -> Optional[int]:
    """Index just past the ']' closing the '[' at `start`, honouring JSON strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def extract_json_array(text: Optional[str]) -> List[Any]:
    """Parse a model reply into a JSON array.

    Tries the whole body first, then the first bracket-matched substring
    that parses as an array (e.g. inside a markdown fence or prose).

    Raises:
        ContractViolation: if no JSON array can be recovered.
    """
    if not text or not text.strip():
        raise ContractViolation("Empty model response")

    body = text.strip()
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        data = None
    if isinstance(data, list):
        return data

    start = body.find("[")
    while start != -1:
        end = _bracket_matched_end(body, start)
        if end is None:
            break
        try:
            data = json.loads(body[start:end])
        except json.JSONDecodeError:
            data = None
        if isinstance(data, list):
            return data
        start = body.find("[", start + 1)

    raise ContractViolation("No JSON array found in model response")


def _validate_items(items: List[Any], schema: type) -> list:
    try:
        return [schema.model_validate(item) for item in items]
    except ValidationError as e:
        raise ContractViolation(f"Invalid {schema.__name__}: {e.error_count()} error(s)") from e


def _index_by_id(parsed: list, id_attr: str, expected_ids: Sequence[str]) -> Dict[str, Any]:
    expected = set(expected_ids)
    by_id: Dict[str, Any] = {}
    for item in parsed:
        item_id = getattr(item, id_attr)
        if item_id not in expected:
            logger.debug(f"Ignoring unknown id in model response: {item_id}")
            continue
        if item_id in by_id:
            raise ContractViolation(f"Duplicate id in model response: {item_id}")
        by_id[item_id] = item

    missing = [i for i in expected_ids if i not in by_id]
    if missing:
        raise ContractViolation(f"Model response omitted {len(missing)} of {len(expected)} ids: {missing[:5]}")
    return by_id


def assign_ranks(results: List[RankResult]) -> List[RankResult]:
    """Sort by rank_score descending (stable) and number ranks 1..N."""
    ordered = sorted(results, key=lambda r: r.rank_score, reverse=True)
    for position, result in enumerate(ordered, start=1):
        result.rank = position
    return ordered


def parse_match_response(text: Optional[str], scholarships: Sequence[ScholarshipCriteria]) -> List[MatchResult]:
    """Validate a matching reply; one AI-tagged MatchResult per scholarship, input order."""
    parsed = _validate_items(extract_json_array(text), MatchResponseItem)
    by_id = _index_by_id(parsed, "scholarship_id", [s.id for s in scholarships])

    results = []
    for scholarship in scholarships:
        item = by_id[scholarship.id]
        results.append(MatchResult(
            scholarship_id=scholarship.id,
            scholarship_name=item.scholarship_name or scholarship.name,
            match_score=item.match_score,
            eligible=item.eligible,
            match_details=MatchDetails(**item.match_details.model_dump()),
            explanation=item.explanation,
            recommendation=item.recommendation,
            source=ResultSource.AI,
        ))
    return results


def parse_rank_response(text: Optional[str], applications: Sequence[ApplicationProfile]) -> List[RankResult]:
    """Validate a ranking reply; ranks are recomputed from rank_score."""
    parsed = _validate_items(extract_json_array(text), RankResponseItem)
    by_id = _index_by_id(parsed, "application_id", [a.id for a in applications])

    results = []
    for application in applications:
        item = by_id[application.id]
        results.append(RankResult(
            application_id=application.id,
            student_name=item.student_name or application.student_name,
            rank_score=item.rank_score,
            eligible=item.eligible,
            score_breakdown=ScoreBreakdown(**item.score_breakdown.model_dump()),
            strengths=item.strengths,
            weaknesses=item.weaknesses,
            recommendation=item.recommendation,
            source=ResultSource.AI,
        ))
    return assign_ranks(results)
