#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from core.matcher.models import MatchResult, RankResult


class RecommendationItem(MatchResult):
    """A saved match result enriched with current scholarship data."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scholarship_id": "b2c1f3d4-0000-4000-8000-000000000001",
                "scholarship_name": "STEM Excellence Grant",
                "organization_name": "Acme Foundation",
                "scholarship_type": "Merit-based",
                "match_score": 85.0,
                "eligible": True,
                "match_details": {
                    "gpa_match": True,
                    "course_match": True,
                    "year_level_match": True,
                    "income_match": True,
                    "skills_match": True
                },
                "explanation": "Excellent match! Strong academic performance.",
                "why_matched": [{"type": "positive", "text": "Strong academic performance"}],
                "recommendation": "Highly Recommended",
                "source": "fallback",
                "slots_remaining": 3,
                "deadline": "2026-12-01T00:00:00+00:00"
            }
        }
    )

    organization_name: Optional[str] = None
    scholarship_type: Optional[str] = None
    slots_remaining: int = Field(default=0, ge=0)
    deadline: Optional[str] = None


class RecommendationsResponse(BaseModel):
    """Response for a student's recommendations."""
    success: bool
    student_id: str
    count: int
    generated_at: Optional[str]
    recommendations: List[RecommendationItem]


class AssessmentResponse(BaseModel):
    """Response after saving an assessment."""
    success: bool
    student_id: str
    submitted_at: Optional[str]


class ExplanationResponse(BaseModel):
    """Free-text explanation of one student x scholarship fit."""
    success: bool
    student_id: str
    scholarship_id: str
    scholarship_name: str
    explanation: str


class RankingsResponse(BaseModel):
    """Response for a ranking run."""
    success: bool
    scholarship_id: str
    count: int
    rankings: List[RankResult]


class CacheStatsResponse(BaseModel):
    """Recommendation cache diagnostics."""
    success: bool
    enabled: bool
    entries: int = 0
    fresh_entries: int = 0
    max_entries: int = 0
    ttl_seconds: float = 0


class CacheClearResponse(BaseModel):
    """Response after clearing the recommendation cache."""
    success: bool
    cleared: int
