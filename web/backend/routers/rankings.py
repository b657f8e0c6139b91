#!/usr/bin/env python3
"""
Sponsor endpoints - applicant ranking.
"""

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.matcher.service import MatchingService
from ..dependencies import get_db, get_matching_service
from ..services.ranking_service import RankingService
from ..models.responses import RankingsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scholarships", tags=["rankings"])


def get_ranking_service(
    db: Session = Depends(get_db),
    matching_service: MatchingService = Depends(get_matching_service)
) -> RankingService:
    return RankingService(db, matching_service)


@router.post("/{scholarship_id}/rankings", response_model=RankingsResponse)
def rank_applicants(
    scholarship_id: str,
    sponsor_id: str = Query(..., min_length=1, description="ID of the sponsor requesting the ranking"),
    service: RankingService = Depends(get_ranking_service)
):
    """
    Rank the scholarship's pending and under-review applications.

    Results are written back to each application (which moves to
    under_review) and returned best first.
    """
    rankings = service.rank_applicants(scholarship_id, sponsor_id)
    return RankingsResponse(
        success=True,
        scholarship_id=scholarship_id,
        count=len(rankings),
        rankings=rankings
    )
