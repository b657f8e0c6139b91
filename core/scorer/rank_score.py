#!/usr/bin/env python3
"""
Rank Score (applicant strength for a scholarship)

rank_score = 50 + 0.40 * academic (only when GPA meets the minimum)
                + 0.20 * financial_need (only when the income label is known)

The 50-point base stands in for the skills and essay dimensions, which the
rule-based path cannot judge and reports as neutral 50s. The weights do not
sum to a clean 100; they are kept as-is until product confirms real weights.
"""

from typing import Optional, Sequence

from core.matcher.models import ApplicationProfile, ScholarshipCriteria, ScoreBreakdown
from core.scorer.models import ApplicantScore
from core.utils import clamp

# Ascending monthly household income labels used by the assessment form.
INCOME_RANGES = (
    "Below ₱10,000",
    "₱10,000 - ₱20,000",
    "₱20,000 - ₱30,000",
    "₱30,000 - ₱50,000",
    "Above ₱50,000",
)

GPA_SCALE = 4.0
NEUTRAL_SCORE = 50.0
ACADEMIC_WEIGHT = 0.40
FINANCIAL_NEED_WEIGHT = 0.20


def academic_score(gpa: float) -> float:
    return clamp(round(gpa / GPA_SCALE * 100))


def financial_need_score(
    income_range: str,
    income_ranges: Sequence[str] = INCOME_RANGES
) -> Optional[float]:
    """Map an income label to a 0-100 need score; lower income, higher need.

    Returns None for labels outside `income_ranges`.
    """
    try:
        index = list(income_ranges).index(income_range)
    except ValueError:
        return None
    steps = len(income_ranges) - 1
    if steps <= 0:
        return NEUTRAL_SCORE
    return (steps - index) * (100.0 / steps)


def score_applicant(
    application: ApplicationProfile,
    scholarship: ScholarshipCriteria,
    income_ranges: Sequence[str] = INCOME_RANGES
) -> ApplicantScore:
    """Score one application against a scholarship's criteria."""
    gpa = application.gpa
    eligible = gpa >= scholarship.min_gpa

    academic = academic_score(gpa)
    academic_contribution = (gpa / GPA_SCALE) * 100 * ACADEMIC_WEIGHT if eligible else 0.0

    need = financial_need_score(application.income_range, income_ranges)
    need_contribution = need * FINANCIAL_NEED_WEIGHT if need is not None else 0.0

    rank_score = clamp(round(NEUTRAL_SCORE + academic_contribution + need_contribution))

    breakdown = ScoreBreakdown(
        academic_score=academic,
        financial_need_score=need if need is not None else NEUTRAL_SCORE,
        skills_score=NEUTRAL_SCORE,
        essay_score=NEUTRAL_SCORE,
        overall_fit_score=rank_score,
    )
    return ApplicantScore(rank_score=rank_score, breakdown=breakdown, eligible=eligible, gpa=gpa)
