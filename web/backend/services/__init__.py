"""Business logic services."""

from .recommendation_service import RecommendationService
from .ranking_service import RankingService
