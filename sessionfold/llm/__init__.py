"""LLM generation and provider registry."""

from .generate import llm_generate
from .providers import LLMProvider, LLMRegistry, LLMResponse

__all__ = [
    "LLMProvider",
    "LLMRegistry",
    "LLMResponse",
    "llm_generate",
]
