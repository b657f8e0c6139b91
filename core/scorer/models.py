#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, field

from core.matcher.models import MatchDetails, ScoreBreakdown


@dataclass
class MatchScore:
    """Fit score of one student against one scholarship."""
    score: float
    details: MatchDetails = field(default_factory=MatchDetails)

    @property
    def eligible(self) -> bool:
        # Year level, income and skills only move the score.
        return self.details.gpa_match and self.details.course_match


@dataclass
class ApplicantScore:
    """Rank score of one application against one scholarship."""
    rank_score: float
    breakdown: ScoreBreakdown
    eligible: bool
    gpa: float = 0.0
