import logging
from datetime import datetime, timezone
from typing import List, Sequence

from sqlalchemy import select

from core.matcher.models import RankResult
from database.models import Application, ApplicationStatus
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    model = Application

    def list_rankable(self, scholarship_id: str) -> List[Application]:
        """Pending and under-review applications for one scholarship."""
        stmt = select(Application).where(
            Application.scholarship_id == scholarship_id,
            Application.status.in_(ApplicationStatus.RANKABLE)
        ).order_by(Application.created_at)
        return list(self.db.execute(stmt).scalars().all())

    def apply_rankings(self, applications: Sequence[Application], rankings: Sequence[RankResult]) -> int:
        """Write rank results onto their applications and mark them under review.

        Results whose application_id is not in `applications` are skipped.

        Returns:
            Number of applications updated
        """
        by_id = {app.id: app for app in applications}
        ranked_at = datetime.now(timezone.utc)

        count = 0
        for result in rankings:
            app = by_id.get(result.application_id)
            if app is None:
                logger.warning(f"Ranking result for unknown application {result.application_id}, skipping")
                continue

            app.rank_score = result.rank_score
            app.rank = result.rank
            app.score_breakdown = result.score_breakdown.model_dump()
            app.strengths = list(result.strengths)
            app.weaknesses = list(result.weaknesses)
            app.recommendation = result.recommendation
            app.ranking_source = result.source.value
            app.ranked_at = ranked_at
            app.status = ApplicationStatus.UNDER_REVIEW
            count += 1

        self.flush()
        logger.info(f"Applied rankings to {count} applications")
        return count
