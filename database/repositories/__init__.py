from database.repositories.base import BaseRepository
from database.repositories.scholarship import ScholarshipRepository
from database.repositories.assessment import AssessmentRepository
from database.repositories.application import ApplicationRepository
from database.repositories.recommendation import RecommendationRepository

__all__ = [
    'BaseRepository',
    'ScholarshipRepository',
    'AssessmentRepository',
    'ApplicationRepository',
    'RecommendationRepository',
]
