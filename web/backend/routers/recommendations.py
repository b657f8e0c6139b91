#!/usr/bin/env python3
"""
Student endpoints - assessment submission and scholarship recommendations.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.matcher.service import MatchingService
from ..dependencies import get_db, get_matching_service
from ..services.recommendation_service import RecommendationService
from ..models.requests import AssessmentSubmission
from ..models.responses import (
    AssessmentResponse,
    RecommendationsResponse,
    ExplanationResponse
)
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


def get_recommendation_service(
    db: Session = Depends(get_db),
    matching_service: MatchingService = Depends(get_matching_service)
) -> RecommendationService:
    return RecommendationService(db, matching_service)


@router.put("/{student_id}/assessment", response_model=AssessmentResponse)
def submit_assessment(
    student_id: str,
    submission: AssessmentSubmission,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Save (or replace) the student's assessment.

    Cached recommendations for the student are discarded; saved ones stay
    until the student regenerates them.
    """
    assessment = service.submit_assessment(student_id, submission)
    return AssessmentResponse(
        success=True,
        student_id=student_id,
        submitted_at=safe_datetime_iso(assessment.submitted_at)
    )


@router.get("/{student_id}/recommendations", response_model=RecommendationsResponse)
def get_recommendations(
    student_id: str,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Get the student's saved recommendations, highest match first.

    Returns an empty list if recommendations were never generated.
    """
    generated_at, items = service.get_recommendations(student_id)
    return RecommendationsResponse(
        success=True,
        student_id=student_id,
        count=len(items),
        generated_at=generated_at,
        recommendations=items
    )


@router.post("/{student_id}/recommendations", response_model=RecommendationsResponse)
def generate_recommendations(
    student_id: str,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Match the student against all open scholarships and save the results.

    Uses the AI model when configured, otherwise (or when it fails) the
    rule-based scorer; each result's `source` says which.
    """
    generated_at, items = service.generate_recommendations(student_id)
    return RecommendationsResponse(
        success=True,
        student_id=student_id,
        count=len(items),
        generated_at=generated_at,
        recommendations=items
    )


@router.get(
    "/{student_id}/scholarships/{scholarship_id}/explanation",
    response_model=ExplanationResponse
)
def get_match_explanation(
    student_id: str,
    scholarship_id: str,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """Explain how well the student fits one scholarship."""
    scholarship, explanation = service.explain(student_id, scholarship_id)
    return ExplanationResponse(
        success=True,
        student_id=student_id,
        scholarship_id=scholarship_id,
        scholarship_name=scholarship.scholarship_name,
        explanation=explanation
    )
