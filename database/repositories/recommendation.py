import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from core.matcher.models import MatchResult
from database.models import RecommendationSnapshot
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RecommendationRepository(BaseRepository):
    model = RecommendationSnapshot

    def get_by_student(self, student_id: str) -> Optional[RecommendationSnapshot]:
        return self.get(student_id)

    def replace(
        self,
        student_id: str,
        results: Sequence[MatchResult],
        assessment_snapshot: Optional[Dict[str, Any]] = None
    ) -> RecommendationSnapshot:
        """Overwrite the student's saved recommendations with `results`."""
        snapshot = self.get_by_student(student_id)
        if snapshot is None:
            snapshot = RecommendationSnapshot(student_id=student_id)
            self.db.add(snapshot)

        snapshot.recommendations = [r.model_dump(mode='json') for r in results]
        snapshot.generated_at = datetime.now(timezone.utc)
        snapshot.assessment_snapshot = dict(assessment_snapshot or {})

        self.flush()
        logger.info(f"Saved {len(results)} recommendations for student {student_id}")
        return snapshot
