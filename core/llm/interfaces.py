"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, Anthropic, etc.).
"""
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers (OpenAI, Ollama, Anthropic, etc.).
    """

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a system/user message pair and return the model's raw text reply.

        Raises:
            LLMError: when the provider is not configured, unreachable,
                answers with a non-2xx status, or returns no content.
        """
        pass
