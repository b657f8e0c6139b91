"""
LLM Errors - typed failure kinds raised by LLM providers.

Callers switch on `LLMError.kind` instead of inspecting message text.
"""
from enum import Enum
from typing import Optional


class LLMErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    RATE_LIMITED = "rate_limited"
    HTTP_STATUS = "http_status"
    EMPTY_RESPONSE = "empty_response"


class LLMError(Exception):
    """Raised by an LLMProvider when a completion could not be obtained."""

    def __init__(self, kind: LLMErrorKind, message: str = "", status_code: Optional[int] = None):
        super().__init__(message or kind.value)
        self.kind = kind
        self.status_code = status_code

    def __str__(self) -> str:
        base = f"[{self.kind.value}] {self.args[0]}"
        if self.status_code is not None:
            return f"{base} (HTTP {self.status_code})"
        return base
