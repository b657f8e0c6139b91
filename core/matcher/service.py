#!/usr/bin/env python3
"""
Matching Service - AI-assisted matching and ranking with rule-based fallback.

Both entry points follow the same sequence:
1. (matching only) cache lookup keyed on student + scholarship set
2. external model call
3. strict parse of the reply
4. on any model-path failure, the deterministic fallback engine
5. (matching only) cache write, for AI and fallback results alike

Neither entry point raises for model-path failures.
"""
from typing import List, Optional, Sequence
import logging

from core.cache.recommendation_cache import RecommendationCache
from core.llm.errors import LLMError, LLMErrorKind
from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import (
    MATCHING_SYSTEM_PROMPT,
    RANKING_SYSTEM_PROMPT,
    EXPLANATION_SYSTEM_PROMPT,
)
from core.matcher.contract import (
    ContractViolation,
    build_matching_prompt,
    build_ranking_prompt,
    build_explanation_prompt,
    parse_match_response,
    parse_rank_response,
)
from core.matcher.fallback import fallback_match, fallback_match_one, fallback_rank
from core.matcher.models import (
    StudentProfile, ScholarshipCriteria, ApplicationProfile, MatchResult, RankResult
)
from core.scorer.rank_score import INCOME_RANGES

logger = logging.getLogger(__name__)


class MatchingService:
    """
    Orchestrates student-to-scholarship matching and applicant ranking.

    `llm` may be None (no model configured); every call then goes straight
    to the fallback engine. `cache` may be None to disable caching.
    """

    def __init__(
        self,
        llm: Optional[LLMProvider] = None,
        cache: Optional[RecommendationCache] = None,
        income_ranges: Sequence[str] = INCOME_RANGES
    ):
        self.llm = llm
        self.cache = cache
        self.income_ranges = tuple(income_ranges)

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        if self.llm is None:
            raise LLMError(LLMErrorKind.NOT_CONFIGURED, "No LLM provider configured")
        return self.llm.complete(system_prompt, user_prompt)

    @staticmethod
    def _log_model_failure(task: str, exc: Exception) -> None:
        if isinstance(exc, LLMError):
            if exc.kind == LLMErrorKind.NOT_CONFIGURED:
                logger.info(f"{task}: model not configured, using fallback")
            else:
                logger.warning(f"{task}: model call failed ({exc.kind.value}), using fallback: {exc}")
        else:
            logger.warning(f"{task}: unusable model response, using fallback: {exc}")

    def match_student_to_scholarships(
        self,
        student: StudentProfile,
        scholarships: Sequence[ScholarshipCriteria],
        student_id: Optional[str] = None
    ) -> List[MatchResult]:
        """Match one student against every scholarship.

        Returns exactly one MatchResult per scholarship. Order is not
        guaranteed; callers sort by match_score before display.

        Args:
            student: Assessment snapshot
            scholarships: Scholarships to evaluate
            student_id: Enables the recommendation cache when given
        """
        if not scholarships:
            return []

        scholarship_ids = [s.id for s in scholarships]
        use_cache = self.cache is not None and bool(student_id)

        if use_cache:
            cached = self.cache.get(student_id, scholarship_ids)
            if cached is not None:
                logger.info(f"Using cached recommendations for student {student_id}")
                return cached

        try:
            reply = self._complete(MATCHING_SYSTEM_PROMPT, build_matching_prompt(student, scholarships))
            matches = parse_match_response(reply, scholarships)
            logger.info(f"AI matched {len(matches)} scholarships")
        except (LLMError, ContractViolation) as e:
            self._log_model_failure("Matching", e)
            matches = fallback_match(student, scholarships)
        except Exception:
            logger.exception("Matching: unexpected model-path error, using fallback")
            matches = fallback_match(student, scholarships)

        if use_cache:
            self.cache.set(student_id, scholarship_ids, matches)

        return matches

    def rank_applicants_for_scholarship(
        self,
        applications: Sequence[ApplicationProfile],
        scholarship: ScholarshipCriteria
    ) -> List[RankResult]:
        """Rank applications for one scholarship; ranks are 1..N by score."""
        if not applications:
            return []

        try:
            reply = self._complete(RANKING_SYSTEM_PROMPT, build_ranking_prompt(applications, scholarship))
            rankings = parse_rank_response(reply, applications)
            logger.info(f"AI ranked {len(rankings)} applications for scholarship {scholarship.id}")
        except (LLMError, ContractViolation) as e:
            self._log_model_failure("Ranking", e)
            rankings = fallback_rank(applications, scholarship, self.income_ranges)
        except Exception:
            logger.exception("Ranking: unexpected model-path error, using fallback")
            rankings = fallback_rank(applications, scholarship, self.income_ranges)

        return rankings

    def explain_match(self, student: StudentProfile, scholarship: ScholarshipCriteria) -> str:
        """Short free-text explanation of one student x scholarship fit."""
        try:
            reply = self._complete(EXPLANATION_SYSTEM_PROMPT, build_explanation_prompt(student, scholarship))
            explanation = (reply or "").strip()
            if not explanation:
                raise ContractViolation("Empty explanation from model")
            return explanation
        except (LLMError, ContractViolation) as e:
            self._log_model_failure("Explanation", e)
        except Exception:
            logger.exception("Explanation: unexpected model-path error, using fallback")
        return fallback_match_one(student, scholarship).explanation

    def clear_cache(self) -> int:
        """Drop all cached recommendations (call after scholarship data changes)."""
        if self.cache is None:
            return 0
        return self.cache.clear()

    def invalidate_student(self, student_id: str) -> int:
        """Drop cached recommendations for one student."""
        if self.cache is None:
            return 0
        return self.cache.invalidate_student(student_id)
