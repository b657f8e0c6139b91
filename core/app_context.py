from dataclasses import dataclass
from typing import Optional

from core.cache.recommendation_cache import RecommendationCache
from core.config_loader import AppConfig, LlmConfig, CacheConfig
from core.llm.openai_service import OpenAIService
from core.matcher.service import MatchingService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process; the recommendation cache lives here so every
    request shares it. DB access is obtained per request, not held here.
    """
    config: AppConfig
    ai_service: OpenAIService
    cache: Optional[RecommendationCache]
    matching_service: MatchingService

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        ai_service = cls._build_ai_service(config.llm)
        cache = cls._build_cache(config.cache)

        matching_service = MatchingService(
            llm=ai_service if ai_service.is_configured else None,
            cache=cache,
            income_ranges=config.ranking.income_ranges,
        )

        return cls(
            config=config,
            ai_service=ai_service,
            cache=cache,
            matching_service=matching_service,
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'model': llm_config.model,
            'temperature': llm_config.temperature,
            'max_tokens': llm_config.max_tokens,
            'timeout_seconds': llm_config.timeout_seconds,
            'max_retries': llm_config.max_retries,
        }

        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model_config=model_config,
        )

    @staticmethod
    def _build_cache(cache_config: CacheConfig) -> Optional[RecommendationCache]:
        if not cache_config.enabled:
            return None
        return RecommendationCache(
            ttl_seconds=cache_config.ttl_seconds,
            max_entries=cache_config.max_entries,
        )
