#!/usr/bin/env python3
"""
Ranking service - business logic for ranking a scholarship's applicants.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from core.matcher.models import RankResult
from core.matcher.service import MatchingService
from database.repositories import ScholarshipRepository, ApplicationRepository
from database.converters import scholarship_to_criteria, application_to_profile
from ..exceptions import ScholarshipNotFoundException, NotScholarshipOwnerException

logger = logging.getLogger(__name__)


class RankingService:
    """Service for sponsor-triggered applicant ranking."""

    def __init__(self, db: Session, matching_service: MatchingService):
        self.db = db
        self.matching = matching_service
        self.scholarships = ScholarshipRepository(db)
        self.applications = ApplicationRepository(db)

    def rank_applicants(self, scholarship_id: str, sponsor_id: str) -> List[RankResult]:
        """
        Rank pending and under-review applications and write the results
        back onto them.

        Raises:
            ScholarshipNotFoundException: Unknown scholarship.
            NotScholarshipOwnerException: `sponsor_id` does not own it.
        """
        scholarship = self.scholarships.get_by_id(scholarship_id)
        if scholarship is None:
            raise ScholarshipNotFoundException(f"Scholarship {scholarship_id} not found")

        if scholarship.sponsor_id != sponsor_id:
            raise NotScholarshipOwnerException(
                f"Sponsor {sponsor_id} does not own scholarship {scholarship_id}"
            )

        applications = self.applications.list_rankable(scholarship_id)
        if not applications:
            logger.info(f"No applications to rank for scholarship {scholarship_id}")
            return []

        rankings = self.matching.rank_applicants_for_scholarship(
            [application_to_profile(a) for a in applications],
            scholarship_to_criteria(scholarship)
        )

        self.applications.apply_rankings(applications, rankings)
        return rankings
