#!/usr/bin/env python3
"""
Cache endpoints - recommendation cache diagnostics and invalidation.
"""

import logging
from fastapi import APIRouter, Depends

from core.matcher.service import MatchingService
from ..dependencies import get_matching_service
from ..models.responses import CacheStatsResponse, CacheClearResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats", response_model=CacheStatsResponse)
def get_cache_stats(matching_service: MatchingService = Depends(get_matching_service)):
    """Get recommendation cache statistics."""
    cache = matching_service.cache
    if cache is None:
        return CacheStatsResponse(success=True, enabled=False)
    return CacheStatsResponse(success=True, enabled=True, **cache.get_cache_stats())


@router.post("/clear", response_model=CacheClearResponse)
def clear_cache(matching_service: MatchingService = Depends(get_matching_service)):
    """
    Drop all cached recommendations.

    Call after scholarship data changes so students see fresh matches.
    """
    cleared = matching_service.clear_cache()
    logger.info(f"Recommendation cache cleared via API ({cleared} entries)")
    return CacheClearResponse(success=True, cleared=cleared)
