"""Utility functions for sessionfold."""

from .config import get_env_float, get_env_int, get_env_str, is_localhost_url
from .retry import retry_with_backoff
from .tracing import get_tracer, traced_span

__all__ = [
    "get_env_float",
    "get_env_int",
    "get_env_str",
    "get_tracer",
    "is_localhost_url",
    "retry_with_backoff",
    "traced_span",
]
