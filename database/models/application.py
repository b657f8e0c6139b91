import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Numeric, Index, UniqueConstraint, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .base import Base


class ApplicationStatus:
    PENDING = 'pending'
    UNDER_REVIEW = 'under_review'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    NOTIFIED = 'notified'
    ACCEPTED = 'accepted'
    NOT_SELECTED = 'not_selected'
    WITHDRAWN = 'withdrawn'

    RANKABLE = (PENDING, UNDER_REVIEW)


class Application(Base):
    """
    A student's application to a scholarship.

    Holds a snapshot of the applicant's assessment at submission time plus
    the result of the latest ranking run, which overwrites earlier ones.
    """
    __tablename__ = 'applications'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    scholarship_id = Column(Text, ForeignKey('scholarships.id', ondelete='CASCADE'), nullable=False)
    student_id = Column(Text, nullable=False)

    # Applicant snapshot
    student_name = Column(Text, nullable=False)
    course = Column(Text, nullable=True)
    year_level = Column(Text, nullable=True)
    gpa = Column(Text, nullable=True)
    income_range = Column(Text, nullable=True)
    skills = Column(Text, default="")
    involvement = Column(Text, default="")
    application_letter = Column(Text, nullable=True)
    essay_reason = Column(Text, nullable=True)

    status = Column(Text, nullable=False, default=ApplicationStatus.PENDING)

    # Latest ranking run
    rank_score = Column(Numeric(5, 2), nullable=True)
    rank = Column(Integer, nullable=True)
    score_breakdown = Column(JSONB, nullable=True)
    strengths = Column(JSONB, default=list)
    weaknesses = Column(JSONB, default=list)
    recommendation = Column(Text, nullable=True)
    ranking_source = Column(Text, nullable=True)
    ranked_at = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())

    scholarship = relationship("Scholarship", back_populates="applications")

    __table_args__ = (
        UniqueConstraint('scholarship_id', 'student_id', name='uq_application_scholarship_student'),
        Index('idx_applications_scholarship_status', 'scholarship_id', 'status'),
        Index('idx_applications_student', 'student_id'),
    )
