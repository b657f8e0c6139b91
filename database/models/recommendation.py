from sqlalchemy import Column, Text, TIMESTAMP
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base


class RecommendationSnapshot(Base):
    """
    The latest generated recommendations for one student.

    `recommendations` is the full list of MatchResult documents; a new
    generation replaces it wholesale, it is never merged.
    """
    __tablename__ = 'recommendation_snapshots'

    student_id = Column(Text, primary_key=True)
    recommendations = Column(JSONB, nullable=False, default=list)
    generated_at = Column(TIMESTAMP(timezone=True), nullable=False)
    # gpa/course/year_level the recommendations were computed from
    assessment_snapshot = Column(JSONB, default=dict)
