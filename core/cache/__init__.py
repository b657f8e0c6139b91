"""Cache Module - Caching services."""
from core.cache.recommendation_cache import (
    RecommendationCache,
    CACHE_TTL_SECONDS,
    CACHE_MAX_ENTRIES
)

__all__ = [
    'RecommendationCache',
    'CACHE_TTL_SECONDS',
    'CACHE_MAX_ENTRIES'
]
