#!/usr/bin/env python3
"""
Recommendation service - business logic for student recommendations.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from core.matcher.models import MatchResult
from core.matcher.service import MatchingService
from database.converters import assessment_to_profile, assessment_snapshot, scholarship_to_criteria
from database.models import Scholarship, StudentAssessment
from database.repositories import (
    AssessmentRepository,
    ScholarshipRepository,
    RecommendationRepository,
)
from ..models.requests import AssessmentSubmission
from ..models.responses import RecommendationItem
from ..utils import safe_datetime_iso
from ..exceptions import (
    AssessmentNotFoundException,
    ScholarshipNotFoundException,
    NoScholarshipsAvailableException,
)

logger = logging.getLogger(__name__)


def sort_by_score(results: Sequence[MatchResult]) -> List[MatchResult]:
    """Highest match_score first; ties keep their incoming order."""
    return sorted(results, key=lambda r: r.match_score, reverse=True)


class RecommendationService:
    """Service for generating and reading student recommendations."""

    def __init__(self, db: Session, matching_service: MatchingService):
        self.db = db
        self.matching = matching_service
        self.assessments = AssessmentRepository(db)
        self.scholarships = ScholarshipRepository(db)
        self.recommendations = RecommendationRepository(db)

    def _require_assessment(self, student_id: str) -> StudentAssessment:
        assessment = self.assessments.get_by_student(student_id)
        if assessment is None:
            raise AssessmentNotFoundException(
                f"No assessment found for student {student_id}. Complete the assessment first."
            )
        return assessment

    def submit_assessment(self, student_id: str, submission: AssessmentSubmission) -> StudentAssessment:
        """Save the student's assessment and drop their cached recommendations."""
        assessment = self.assessments.upsert(student_id, submission.model_dump())
        self.matching.invalidate_student(student_id)
        return assessment

    def get_recommendations(self, student_id: str) -> Tuple[Optional[str], List[RecommendationItem]]:
        """
        Get the student's saved recommendations, enriched with current
        scholarship data.

        Results whose scholarship no longer exists are dropped.

        Returns:
            (generated_at ISO string or None, recommendations)
        """
        self._require_assessment(student_id)

        snapshot = self.recommendations.get_by_student(student_id)
        if snapshot is None:
            return None, []

        saved = []
        for doc in snapshot.recommendations or []:
            try:
                saved.append(MatchResult.model_validate(doc))
            except ValidationError as e:
                logger.warning(f"Skipping malformed saved recommendation for student {student_id}: {e}")

        items = self._enrich(sort_by_score(saved))
        return safe_datetime_iso(snapshot.generated_at), items

    def generate_recommendations(self, student_id: str) -> Tuple[Optional[str], List[RecommendationItem]]:
        """
        Match the student against every open scholarship with remaining
        slots and replace their saved recommendations.

        Raises:
            AssessmentNotFoundException: No assessment on file.
            NoScholarshipsAvailableException: Nothing to match against.
        """
        assessment = self._require_assessment(student_id)

        open_scholarships = self.scholarships.list_open_with_slots()
        if not open_scholarships:
            raise NoScholarshipsAvailableException("No scholarships available at this time")

        student = assessment_to_profile(assessment)
        criteria = [scholarship_to_criteria(s) for s in open_scholarships]

        results = sort_by_score(
            self.matching.match_student_to_scholarships(student, criteria, student_id=student_id)
        )

        snapshot = self.recommendations.replace(
            student_id,
            results,
            assessment_snapshot=assessment_snapshot(assessment)
        )
        logger.info(f"Generated {len(results)} recommendations for student {student_id}")

        return safe_datetime_iso(snapshot.generated_at), self._enrich(results, open_scholarships)

    def explain(self, student_id: str, scholarship_id: str) -> Tuple[Scholarship, str]:
        """Explain how well the student fits one scholarship."""
        assessment = self._require_assessment(student_id)

        scholarship = self.scholarships.get_by_id(scholarship_id)
        if scholarship is None:
            raise ScholarshipNotFoundException(f"Scholarship {scholarship_id} not found")

        explanation = self.matching.explain_match(
            assessment_to_profile(assessment),
            scholarship_to_criteria(scholarship)
        )
        return scholarship, explanation

    def _enrich(
        self,
        results: Sequence[MatchResult],
        scholarships: Optional[Sequence[Scholarship]] = None
    ) -> List[RecommendationItem]:
        if scholarships is None:
            scholarships = self.scholarships.get_by_ids([r.scholarship_id for r in results])
        by_id: Dict[str, Scholarship] = {s.id: s for s in scholarships}

        items = []
        for result in results:
            scholarship = by_id.get(result.scholarship_id)
            if scholarship is None:
                continue

            extra: Dict[str, Any] = {
                'scholarship_name': scholarship.scholarship_name or result.scholarship_name,
                'organization_name': scholarship.organization_name,
                'scholarship_type': scholarship.scholarship_type,
                'slots_remaining': scholarship_to_criteria(scholarship).slots_remaining,
                'deadline': safe_datetime_iso(scholarship.deadline),
            }
            items.append(RecommendationItem(**{**result.model_dump(), **extra}))

        dropped = len(results) - len(items)
        if dropped:
            logger.info(f"Dropped {dropped} recommendations for scholarships that no longer exist")
        return items
