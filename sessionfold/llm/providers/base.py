"""Base class for LLM providers and the model registry."""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field


class LLMResponse(BaseModel):
    """Response from an LLM call."""

    content: str | None = None
    usage: dict[str, Any] | None = Field(default_factory=dict)
    model: str | None = None
    stop_reason: str | None = None


class LLMProvider(ABC):
    """Base class for LLM providers.

    sessionfold ships no concrete provider; applications wrap their model
    client of choice in a subclass.
    """

    @abstractmethod
    async def generate(
        self,
        messages: list[dict[str, Any]],
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs,
    ) -> LLMResponse:
        """
        Make a chat completion request to the LLM.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            model: Model identifier (e.g., "gpt-4o-mini", "gemini-2.5-flash")
            temperature: Optional temperature parameter
            max_tokens: Optional max tokens parameter
            **kwargs: Provider-specific additional parameters

        Returns:
            LLMResponse with content, usage, model, and stop_reason
        """
        pass


ProviderFactory = Callable[[str], LLMProvider]


class LLMRegistry:
    """Lookup table from model-name patterns to provider factories.

    Registries are plain objects passed to whatever needs to resolve a model
    name; there is no process-wide instance.

    Usage:
        registry = LLMRegistry()
        registry.register(r"gpt-.*", lambda model: MyOpenAIProvider())
        provider = registry.resolve("gpt-4o-mini")
    """

    def __init__(self, providers: dict[str, LLMProvider | ProviderFactory] | None = None):
        self._entries: list[tuple[re.Pattern[str], ProviderFactory]] = []
        for pattern, provider in (providers or {}).items():
            self.register(pattern, provider)

    def register(self, pattern: str, provider: LLMProvider | ProviderFactory) -> None:
        """
        Register a provider for model names fully matching a regex pattern.

        Args:
            pattern: Regular expression matched against the whole model name
            provider: Provider instance, or factory called with the model name
        """
        if isinstance(provider, LLMProvider):
            instance = provider

            def factory(model: str) -> LLMProvider:
                return instance
        elif callable(provider):
            factory = provider
        else:
            raise TypeError(
                f"Provider for '{pattern}' must be an LLMProvider or a factory, "
                f"got {type(provider)}"
            )
        self._entries.append((re.compile(pattern), factory))

    def resolve(self, model: str) -> LLMProvider:
        """
        Get the provider for a model name. Later registrations take precedence.

        Raises:
            ValueError: If no registered pattern matches the model name
        """
        for pattern, factory in reversed(self._entries):
            if pattern.fullmatch(model):
                provider = factory(model)
                if not isinstance(provider, LLMProvider):
                    raise TypeError(
                        f"Factory for '{pattern.pattern}' returned {type(provider)}, "
                        "expected an LLMProvider"
                    )
                return provider
        available = ", ".join(p.pattern for p, _ in self._entries) or "(none)"
        raise ValueError(f"No LLM provider registered for model '{model}'. Patterns: {available}")

    def __contains__(self, model: str) -> bool:
        return any(pattern.fullmatch(model) for pattern, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)
