"""
ORM rows to matcher input models.

The input models' own validators take care of string/Decimal coercion, so
rows are passed through as stored.
"""
from core.matcher.models import StudentProfile, ScholarshipCriteria, ApplicationProfile
from database.models import StudentAssessment, Scholarship, Application


def assessment_to_profile(assessment: StudentAssessment) -> StudentProfile:
    return StudentProfile(
        student_id=assessment.student_id,
        full_name=assessment.full_name,
        course=assessment.course,
        year_level=assessment.year_level,
        gpa=assessment.gpa,
        income_range=assessment.income_range,
        skills=assessment.skills,
        involvement=assessment.involvement,
        scholarship_type=assessment.scholarship_type,
        essay=assessment.essay_reason,
    )


def scholarship_to_criteria(scholarship: Scholarship) -> ScholarshipCriteria:
    return ScholarshipCriteria(
        id=scholarship.id,
        name=scholarship.scholarship_name,
        organization=scholarship.organization_name,
        scholarship_type=scholarship.scholarship_type,
        min_gpa=scholarship.min_gpa,
        eligible_courses=scholarship.eligible_courses,
        eligible_year_levels=scholarship.eligible_year_levels,
        income_limit=scholarship.income_limit,
        required_skills=scholarship.required_skills,
        slots_total=scholarship.slots_available,
        slots_filled=scholarship.slots_filled,
    )


def application_to_profile(application: Application) -> ApplicationProfile:
    # Older applications stored the essay as essay_reason only
    letter = application.application_letter or application.essay_reason
    return ApplicationProfile(
        id=application.id,
        student_name=application.student_name,
        course=application.course,
        year_level=application.year_level,
        gpa=application.gpa,
        income_range=application.income_range,
        skills=application.skills,
        application_letter=letter,
        involvement=application.involvement,
    )


def assessment_snapshot(assessment: StudentAssessment) -> dict:
    """The assessment fields recommendations are stored alongside."""
    return {
        'gpa': assessment.gpa,
        'course': assessment.course,
        'year_level': assessment.year_level,
    }
