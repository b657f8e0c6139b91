"""
OpenAI Service - LLM implementation using the OpenAI chat completions API.

Translates every failure into an LLMError with a typed kind so callers can
route to their fallback without inspecting error messages.
"""
from typing import Dict, Any, List, Optional
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.errors import LLMError, LLMErrorKind
from core.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_RETRIES = 2

# Requests are made while a user waits on the page.
MAX_RETRY_WAIT_SECONDS = 10.0


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _is_retryable(exc: BaseException) -> bool:
    """Return True for transient errors that are worth retrying."""
    return isinstance(exc, (
        openai.RateLimitError,
        openai.APITimeoutError,
        openai.APIConnectionError,
        openai.InternalServerError,
    ))


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse an OpenAI reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Extract the longest declared wait from rate-limit response headers.

    Reads ``retry-after``, ``x-ratelimit-reset-requests`` and
    ``x-ratelimit-reset-tokens``, taking the maximum.

    Returns 0.0 if no usable header is present.
    """
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if not headers:
        return 0.0

    candidates: List[float] = []

    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            pass

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Return how long tenacity should sleep before the next attempt.

    For ``RateLimitError``: honours server-declared timers via response headers.
    For all other retryable errors: capped exponential backoff.
    """
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, MAX_RETRY_WAIT_SECONDS)

    exp = wait_exponential(multiplier=1, min=1, max=MAX_RETRY_WAIT_SECONDS)
    return exp(retry_state)


def _to_llm_error(exc: Exception) -> LLMError:
    """Map an openai exception onto a typed LLMError."""
    # Subclasses first: APITimeoutError < APIConnectionError, RateLimitError < APIStatusError.
    if isinstance(exc, openai.APITimeoutError):
        return LLMError(LLMErrorKind.TIMEOUT, str(exc))
    if isinstance(exc, openai.APIConnectionError):
        return LLMError(LLMErrorKind.CONNECTION, str(exc))
    if isinstance(exc, openai.RateLimitError):
        return LLMError(LLMErrorKind.RATE_LIMITED, str(exc), status_code=exc.status_code)
    if isinstance(exc, openai.APIStatusError):
        return LLMError(LLMErrorKind.HTTP_STATUS, str(exc), status_code=exc.status_code)
    return LLMError(LLMErrorKind.CONNECTION, str(exc))


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Without an API key the service is constructed but unconfigured: every
    call raises LLMError(NOT_CONFIGURED).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None
    ):
        self.model_config = model_config or {}
        self.model = self.model_config.get('model') or DEFAULT_MODEL
        self.temperature = self.model_config.get('temperature', DEFAULT_TEMPERATURE)
        self.max_tokens = self.model_config.get('max_tokens', DEFAULT_MAX_TOKENS)
        self.timeout_seconds = self.model_config.get('timeout_seconds', DEFAULT_TIMEOUT_SECONDS)
        self.max_retries = max(0, int(self.model_config.get('max_retries', DEFAULT_MAX_RETRIES)))

        self.client: Optional[OpenAI] = None
        if api_key:
            # Retries are handled by tenacity below, not by the SDK.
            client_kwargs: Dict[str, Any] = {
                'api_key': api_key,
                'timeout': self.timeout_seconds,
                'max_retries': 0,
            }
            if base_url:
                client_kwargs['base_url'] = base_url
            self.client = OpenAI(**client_kwargs)
        else:
            logger.warning("OpenAI API key not configured; AI matching will use the rule-based fallback")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion and return the reply text."""
        if self.client is None:
            raise LLMError(LLMErrorKind.NOT_CONFIGURED, "OpenAI API key not configured")

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        retryer = Retrying(
            retry=retry_if_exception(_is_retryable),
            wait=_wait_respecting_retry_after,
            stop=stop_after_attempt(self.max_retries + 1),
            before_sleep=_log_retry,
            reraise=True,
        )

        try:
            response = retryer(self._create_completion, messages)
        except openai.OpenAIError as e:
            raise _to_llm_error(e) from e

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise LLMError(LLMErrorKind.EMPTY_RESPONSE, f"Malformed completion response: {e}") from e

        if not content or not content.strip():
            raise LLMError(LLMErrorKind.EMPTY_RESPONSE, "Completion returned no content")

        logger.debug(f"Completion from {self.model}: {len(content)} chars")
        return content

    def _create_completion(self, messages: List[Dict[str, str]]):
        return self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
