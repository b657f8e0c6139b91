import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Integer, Numeric, Index, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .base import Base


class ScholarshipStatus:
    PENDING = 'Pending'
    OPEN = 'Open'
    CLOSED = 'Closed'
    DRAFT = 'Draft'


class Scholarship(Base):
    """
    A sponsor's scholarship offer and its selection criteria.

    Created by a sponsor as Pending, opened by an admin, closed on expiry.
    List-valued criteria are stored as JSONB arrays; an empty array means
    "no restriction".
    """
    __tablename__ = 'scholarships'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    sponsor_id = Column(Text, nullable=False)

    scholarship_name = Column(Text, nullable=False)
    organization_name = Column(Text, nullable=True)
    scholarship_type = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    min_gpa = Column(Numeric(3, 2), default=0)
    eligible_courses = Column(JSONB, default=list)
    eligible_year_levels = Column(JSONB, default=list)
    income_limit = Column(Numeric(12, 2), nullable=True)
    required_skills = Column(JSONB, default=list)

    slots_available = Column(Integer, nullable=False, default=0)
    slots_filled = Column(Integer, nullable=False, default=0)

    status = Column(Text, nullable=False, default=ScholarshipStatus.PENDING)
    deadline = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())

    applications = relationship("Application", back_populates="scholarship", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_scholarships_status', 'status'),
        Index('idx_scholarships_sponsor', 'sponsor_id'),
    )
