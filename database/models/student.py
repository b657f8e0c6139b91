from sqlalchemy import Column, Text, TIMESTAMP, Integer, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base


class StudentAssessment(Base):
    """
    A student's assessment answers; one active row per student.

    Re-submitting the assessment overwrites the row. GPA is kept as the text
    the student entered and coerced when scored.
    """
    __tablename__ = 'student_assessments'

    student_id = Column(Text, primary_key=True)

    full_name = Column(Text, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(Text, nullable=True)
    course = Column(Text, nullable=False)
    year_level = Column(Text, nullable=False)
    gpa = Column(Text, nullable=False)
    income_range = Column(Text, nullable=False)
    scholarship_type = Column(Text, nullable=False)
    skills = Column(Text, default="")
    involvement = Column(Text, default="")
    essay_reason = Column(Text, nullable=False)

    # Storage keys of uploaded documents (grades, coe, schoolId, otherDocuments)
    files = Column(JSONB, default=dict)

    submitted_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())
