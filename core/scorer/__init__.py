#!/usr/bin/env python3
"""
Scoring Module - Rule-based scoring.

Public API:
- score_match: student x scholarship fit score (0-100)
- score_applicant: application x scholarship rank score (0-100)
- recommendation_for: fit score -> recommendation tier

- models.py: Data structures (MatchScore, ApplicantScore)
- match_score.py: Fit score rules and recommendation thresholds
- rank_score.py: Academic and financial-need rank score
"""

from core.scorer.models import MatchScore, ApplicantScore
from core.scorer.match_score import score_match, recommendation_for
from core.scorer.rank_score import score_applicant, INCOME_RANGES

__all__ = [
    'MatchScore',
    'ApplicantScore',
    'score_match',
    'recommendation_for',
    'score_applicant',
    'INCOME_RANGES',
]
