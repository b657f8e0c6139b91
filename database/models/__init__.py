from .base import Base
from .scholarship import Scholarship, ScholarshipStatus
from .student import StudentAssessment
from .application import Application, ApplicationStatus
from .recommendation import RecommendationSnapshot

__all__ = [
    'Base',
    'Scholarship',
    'ScholarshipStatus',
    'StudentAssessment',
    'Application',
    'ApplicationStatus',
    'RecommendationSnapshot',
]
