import logging
from typing import List, Optional

from sqlalchemy import select

from database.models import Scholarship, ScholarshipStatus
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ScholarshipRepository(BaseRepository):
    model = Scholarship

    def get_by_id(self, scholarship_id: str) -> Optional[Scholarship]:
        return self.get(scholarship_id)

    def get_by_ids(self, scholarship_ids: List[str]) -> List[Scholarship]:
        if not scholarship_ids:
            return []
        stmt = select(Scholarship).where(Scholarship.id.in_(scholarship_ids))
        return list(self.db.execute(stmt).scalars().all())

    def list_open_with_slots(self) -> List[Scholarship]:
        """Open scholarships that still have at least one unfilled slot."""
        stmt = select(Scholarship).where(
            Scholarship.status == ScholarshipStatus.OPEN,
            Scholarship.slots_available > Scholarship.slots_filled
        ).order_by(Scholarship.created_at.desc())

        scholarships = list(self.db.execute(stmt).scalars().all())
        logger.info(f"Found {len(scholarships)} open scholarships with remaining slots")
        return scholarships
