"""LLM provider contract and registry."""

from .base import LLMProvider, LLMRegistry, LLMResponse, ProviderFactory

__all__ = ["LLMProvider", "LLMRegistry", "LLMResponse", "ProviderFactory"]
