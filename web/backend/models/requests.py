#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict


class AssessmentSubmission(BaseModel):
    """A student's assessment form. Re-submitting replaces the previous one."""
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName", min_length=1)
    age: Optional[int] = Field(None, ge=0, le=120)
    gender: Optional[str] = None
    course: str = Field(..., min_length=1)
    year_level: str = Field(..., alias="yearLevel", min_length=1)
    gpa: str = Field(..., min_length=1, description="GPA as entered, e.g. '3.5'")
    income_range: str = Field(..., alias="incomeRange", min_length=1)
    scholarship_type: str = Field(..., alias="scholarshipType", min_length=1)
    skills: str = ""
    involvement: str = ""
    essay_reason: str = Field(..., alias="essayReason", min_length=1)
    files: Dict[str, str] = Field(default_factory=dict, description="Uploaded document keys")
