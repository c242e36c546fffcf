"""Validators - Pure functions for validation (exception-based)."""
from typing import Optional
from urllib.parse import urlsplit


class ValidationError(ValueError):
    """Raised when validation fails."""

    pass


def validate_positive_ms(name: str, value: int) -> None:
    """Validate a millisecond duration is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")


def validate_ping_url(ping_url: str) -> None:
    """
    Validate the health-check location.

    Accepts an absolute http(s) URL or an absolute path ("/api/health").
    """
    if not ping_url or not isinstance(ping_url, str):
        raise ValidationError("ping_url is required")

    if any(ch.isspace() for ch in ping_url):
        raise ValidationError(f"ping_url must not contain whitespace: {ping_url!r}")

    parts = urlsplit(ping_url)
    if parts.scheme or parts.netloc:
        if parts.scheme not in ("http", "https"):
            raise ValidationError(f"ping_url scheme must be http or https: {ping_url!r}")
        if not parts.netloc:
            raise ValidationError(f"ping_url has no host: {ping_url!r}")
        return

    if not ping_url.startswith("/"):
        raise ValidationError(f"ping_url must be an absolute URL or start with '/': {ping_url!r}")


def validate_base_url(base_url: Optional[str]) -> None:
    """Validate the origin used to resolve relative ping paths."""
    if base_url is None:
        return
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValidationError(f"base_url must be an http(s) origin: {base_url!r}")
