#!/usr/bin/env python3
"""
Fallback Engine - deterministic matching and ranking.

Used whenever the model path fails (not configured, unreachable, non-2xx,
unparseable reply). Produces the same MatchResult/RankResult shapes as the
model path, tagged with source="fallback". Never drops an input and never
raises on well-formed input.
"""

import logging
from typing import List, Sequence, Tuple

from core.matcher.contract import assign_ranks
from core.matcher.models import (
    StudentProfile, ScholarshipCriteria, ApplicationProfile,
    MatchDetails, MatchResult, RankResult, WhyMatchedReason, ResultSource
)
from core.scorer.match_score import score_match, recommendation_for
from core.scorer.rank_score import score_applicant, INCOME_RANGES

logger = logging.getLogger(__name__)

GPA_MARGIN_FOR_EXCEEDS = 0.5
STRONG_ACADEMIC_GPA = 3.5
APPROVAL_THRESHOLD = 70

STRONG_ACADEMIC_STRENGTH = "Strong academic performance"
GPA_BELOW_REQUIREMENT_WEAKNESS = "GPA below requirement"
RECOMMENDED_FOR_APPROVAL = "Recommended for Approval"
NEEDS_REVIEW = "Needs Review"


def _fmt_gpa(value: float) -> str:
    return f"{value:g}"


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:] if text else text


def why_matched_reasons(
    student: StudentProfile,
    scholarship: ScholarshipCriteria,
    details: MatchDetails
) -> Tuple[List[str], List[str]]:
    """Human-readable positive and negative reasons behind a fit score."""
    positives: List[str] = []
    negatives: List[str] = []

    gpa = _fmt_gpa(student.gpa)
    min_gpa = _fmt_gpa(scholarship.min_gpa)
    if details.gpa_match:
        if student.gpa >= scholarship.min_gpa + GPA_MARGIN_FOR_EXCEEDS:
            positives.append(f"Your GPA ({gpa}) exceeds the requirement ({min_gpa}) by a significant margin")
        else:
            positives.append(f"Your GPA ({gpa}) meets the minimum requirement of {min_gpa}")
    else:
        negatives.append(f"Your GPA ({gpa}) is below the minimum requirement of {min_gpa}")

    if details.course_match:
        if scholarship.eligible_courses:
            positives.append(f"Your course ({student.course}) is eligible for this scholarship")
        else:
            positives.append(f"This scholarship is open to all courses including {student.course}")
    else:
        negatives.append(f"Your course ({student.course}) may not be in the list of eligible programs")

    if details.year_level_match:
        positives.append(f"Your year level ({student.year_level}) qualifies for this scholarship")
    elif scholarship.eligible_year_levels:
        negatives.append(f"This scholarship is for {', '.join(scholarship.eligible_year_levels)} students")

    if student.scholarship_type and student.scholarship_type == scholarship.scholarship_type:
        positives.append(f"This {scholarship.scholarship_type} scholarship matches your preference")

    return positives, negatives


def summarize(score: float, positives: List[str], negatives: List[str]) -> str:
    """One-line explanation.

    80+ leads with the strongest positive reason; anything lower leads with
    the primary negative reason and appends a positive one when there is one.
    """
    if score >= 80:
        return f"Excellent match! {positives[0] + '.' if positives else 'You meet the key requirements for this scholarship.'}"

    if score >= 60:
        prefix = "Good match."
    elif score >= 40:
        prefix = "Partial match."
    else:
        reasons = ". ".join(negatives) if negatives else "Few of the key requirements are met"
        return f"Limited match. {reasons}."

    lead = f"{negatives[0]}." if negatives else "Some requirements may not be met."
    summary = f"{prefix} {lead}"
    if positives:
        summary += f" On the positive side, {_lower_first(positives[0])}."
    return summary


def fallback_match_one(student: StudentProfile, scholarship: ScholarshipCriteria) -> MatchResult:
    scored = score_match(student, scholarship)
    positives, negatives = why_matched_reasons(student, scholarship, scored.details)

    why_matched = [WhyMatchedReason(type="positive", text=p) for p in positives]
    why_matched += [WhyMatchedReason(type="negative", text=n) for n in negatives]

    return MatchResult(
        scholarship_id=scholarship.id,
        scholarship_name=scholarship.name,
        match_score=scored.score,
        eligible=scored.eligible,
        match_details=scored.details,
        explanation=summarize(scored.score, positives, negatives),
        why_matched=why_matched,
        recommendation=recommendation_for(scored.score),
        source=ResultSource.FALLBACK,
    )


def fallback_match(student: StudentProfile, scholarships: Sequence[ScholarshipCriteria]) -> List[MatchResult]:
    """Rule-based match for every scholarship, best first (stable on ties)."""
    matches = [fallback_match_one(student, s) for s in scholarships]
    matches.sort(key=lambda m: m.match_score, reverse=True)
    logger.debug(f"Fallback matched {len(matches)} scholarships")
    return matches


def fallback_rank(
    applications: Sequence[ApplicationProfile],
    scholarship: ScholarshipCriteria,
    income_ranges: Sequence[str] = INCOME_RANGES
) -> List[RankResult]:
    """Rule-based ranking of every application, ranks 1..N by score."""
    rankings = []
    for application in applications:
        scored = score_applicant(application, scholarship, income_ranges)
        rankings.append(RankResult(
            application_id=application.id,
            student_name=application.student_name,
            rank_score=scored.rank_score,
            eligible=scored.eligible,
            score_breakdown=scored.breakdown,
            strengths=[STRONG_ACADEMIC_STRENGTH] if scored.gpa >= STRONG_ACADEMIC_GPA else [],
            weaknesses=[GPA_BELOW_REQUIREMENT_WEAKNESS] if not scored.eligible else [],
            recommendation=RECOMMENDED_FOR_APPROVAL if scored.rank_score >= APPROVAL_THRESHOLD else NEEDS_REVIEW,
            source=ResultSource.FALLBACK,
        ))
    return assign_ranks(rankings)
