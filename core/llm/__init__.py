"""LLM Module - LLM services and interfaces."""
from core.llm.errors import LLMError, LLMErrorKind
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService

__all__ = ['LLMError', 'LLMErrorKind', 'LLMProvider', 'OpenAIService']
