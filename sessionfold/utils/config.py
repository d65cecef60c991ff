import os


def is_localhost_url(url: str) -> bool:
    """Check if URL is a localhost address."""
    try:
        if url:
            from urllib.parse import urlparse

            parsed = urlparse(url)
            hostname = parsed.hostname or ""
            return hostname in ("localhost", "127.0.0.1", "::1") or hostname.startswith("127.")
        return False
    except ValueError:
        return False


def get_env_int(name: str, default: int | None = None) -> int | None:
    """Read an integer environment variable, falling back to default when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_env_float(name: str, default: float | None = None) -> float | None:
    """Read a float environment variable, falling back to default when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_env_str(name: str, default: str | None = None) -> str | None:
    """Read a string environment variable, treating blank values as unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()
