#!/usr/bin/env python3
"""
Match Score (student fits scholarship)

Rule-based fit score in [0, 100]:
- Base 50.
- GPA meets minimum: +15, otherwise -20.
- Course listed (substring either way, case-insensitive): +15, otherwise -15.
  No course restriction: +10.
- Year level listed (substring either way): +10, otherwise -10.
  No year restriction: +5.
- Scholarship type equals the student's preference: +10.

Eligibility is GPA and course only.
"""

from typing import List

from core.matcher.models import (
    StudentProfile, ScholarshipCriteria, MatchDetails, Recommendation
)
from core.scorer.models import MatchScore
from core.utils import clamp, normalize_text

BASE_SCORE = 50

GPA_MET_BONUS = 15
GPA_MISSED_PENALTY = 20

COURSE_MATCH_BONUS = 15
COURSE_MISMATCH_PENALTY = 15
COURSE_OPEN_BONUS = 10

YEAR_MATCH_BONUS = 10
YEAR_MISMATCH_PENALTY = 10
YEAR_OPEN_BONUS = 5

PREFERENCE_BONUS = 10

HIGHLY_RECOMMENDED_THRESHOLD = 80
RECOMMENDED_THRESHOLD = 60
CONSIDER_THRESHOLD = 40


def contains_either_way(value: str, allowed: List[str]) -> bool:
    """True when any allowed entry contains `value` or is contained in it."""
    needle = normalize_text(value)
    for entry in allowed:
        candidate = normalize_text(entry)
        if candidate in needle or needle in candidate:
            return True
    return False


def recommendation_for(score: float) -> Recommendation:
    if score >= HIGHLY_RECOMMENDED_THRESHOLD:
        return Recommendation.HIGHLY_RECOMMENDED
    if score >= RECOMMENDED_THRESHOLD:
        return Recommendation.RECOMMENDED
    if score >= CONSIDER_THRESHOLD:
        return Recommendation.CONSIDER
    return Recommendation.NOT_RECOMMENDED


def score_match(student: StudentProfile, scholarship: ScholarshipCriteria) -> MatchScore:
    """Score how well a student fits a scholarship's criteria.

    The type-preference bonus needs a non-empty preference; a blank one
    means "no preference" and never matches a blank scholarship type.

    Args:
        student: Assessment snapshot
        scholarship: Scholarship criteria

    Returns:
        MatchScore with the clamped score and per-criterion details
    """
    score = BASE_SCORE
    details = MatchDetails()

    if student.gpa >= scholarship.min_gpa:
        score += GPA_MET_BONUS
    else:
        details.gpa_match = False
        score -= GPA_MISSED_PENALTY

    if scholarship.eligible_courses:
        if contains_either_way(student.course, scholarship.eligible_courses):
            score += COURSE_MATCH_BONUS
        else:
            details.course_match = False
            score -= COURSE_MISMATCH_PENALTY
    else:
        score += COURSE_OPEN_BONUS

    if scholarship.eligible_year_levels:
        if contains_either_way(student.year_level, scholarship.eligible_year_levels):
            score += YEAR_MATCH_BONUS
        else:
            details.year_level_match = False
            score -= YEAR_MISMATCH_PENALTY
    else:
        score += YEAR_OPEN_BONUS

    if student.scholarship_type and student.scholarship_type == scholarship.scholarship_type:
        score += PREFERENCE_BONUS

    return MatchScore(score=clamp(score), details=details)
