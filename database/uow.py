import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repositories import (
    ScholarshipRepository,
    AssessmentRepository,
    ApplicationRepository,
    RecommendationRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """All repositories bound to one Session."""
    session: Session
    scholarships: ScholarshipRepository
    assessments: AssessmentRepository
    applications: ApplicationRepository
    recommendations: RecommendationRepository

    @classmethod
    def for_session(cls, session: Session) -> "Repositories":
        return cls(
            session=session,
            scholarships=ScholarshipRepository(session),
            assessments=AssessmentRepository(session),
            applications=ApplicationRepository(session),
            recommendations=RecommendationRepository(session),
        )


@contextlib.contextmanager
def uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields Repositories bound to a fresh Session from `session_factory`
    (default: the DATABASE_URL SessionLocal). Commits on success,
    rolls back on exception, always closes.

    Usage:
        with uow() as repos:
            assessment = repos.assessments.get_by_student(student_id)
            repos.recommendations.replace(student_id, results)
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        yield Repositories.for_session(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
