"""Single-prompt LLM generation helper."""

import logging

from ..utils.retry import retry_with_backoff
from .providers import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


async def llm_generate(
    provider: LLMProvider,
    model: str,
    prompt: str,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    max_retries: int = 0,
    base_delay: float = 1.0,
) -> LLMResponse:
    """
    Send one user prompt to a provider and return its response.

    Args:
        provider: LLM provider to call
        model: Model identifier passed through to the provider
        prompt: Prompt text, sent as a single user message
        temperature: Optional temperature parameter
        max_tokens: Optional max tokens parameter
        max_retries: Retries on provider errors, with exponential backoff
        base_delay: Base delay in seconds between retries

    Returns:
        LLMResponse from the provider
    """
    messages = [{"role": "user", "content": prompt}]
    logger.debug("Generating with model %s (%d prompt chars)", model, len(prompt))
    return await retry_with_backoff(
        provider.generate,
        max_retries,
        base_delay,
        10.0,
        messages=messages,
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
    )
