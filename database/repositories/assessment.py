import logging
from typing import Any, Dict, Optional

from database.models import StudentAssessment
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_ASSESSMENT_FIELDS = (
    'full_name', 'age', 'gender', 'course', 'year_level', 'gpa', 'income_range',
    'scholarship_type', 'skills', 'involvement', 'essay_reason', 'files',
)


class AssessmentRepository(BaseRepository):
    model = StudentAssessment

    def get_by_student(self, student_id: str) -> Optional[StudentAssessment]:
        return self.get(student_id)

    def upsert(self, student_id: str, data: Dict[str, Any]) -> StudentAssessment:
        """Create the student's assessment or overwrite the existing one."""
        assessment = self.get_by_student(student_id)
        if assessment is None:
            assessment = StudentAssessment(student_id=student_id)
            self.db.add(assessment)
            logger.info(f"Creating assessment for student {student_id}")
        else:
            logger.info(f"Replacing assessment for student {student_id}")

        for field in _ASSESSMENT_FIELDS:
            if field in data:
                setattr(assessment, field, data[field])

        self.flush()
        return assessment
