"""
Tests for AppContext wiring.
"""
from core.app_context import AppContext
from core.config_loader import AppConfig, LlmConfig, CacheConfig, RankingConfig


class TestAppContext:

    def test_01_without_api_key_matching_has_no_llm(self):
        ctx = AppContext.build(AppConfig())

        assert ctx.ai_service.is_configured is False
        assert ctx.matching_service.llm is None
        assert ctx.matching_service.cache is ctx.cache

    def test_02_with_api_key_matching_uses_openai(self):
        config = AppConfig(llm=LlmConfig(api_key="sk-test", model="gpt-test", max_retries=1))

        ctx = AppContext.build(config)

        assert ctx.matching_service.llm is ctx.ai_service
        assert ctx.ai_service.model == "gpt-test"
        assert ctx.ai_service.max_retries == 1

    def test_03_cache_settings(self):
        ctx = AppContext.build(AppConfig(cache=CacheConfig(ttl_seconds=5, max_entries=7)))

        assert ctx.cache.ttl_seconds == 5
        assert ctx.cache.max_entries == 7

    def test_04_cache_disabled(self):
        ctx = AppContext.build(AppConfig(cache=CacheConfig(enabled=False)))

        assert ctx.cache is None
        assert ctx.matching_service.cache is None

    def test_05_income_ranges_are_passed_to_ranking(self):
        ranges = ["low", "mid", "high"]
        ctx = AppContext.build(AppConfig(ranking=RankingConfig(income_ranges=ranges)))

        assert ctx.matching_service.income_ranges == tuple(ranges)
