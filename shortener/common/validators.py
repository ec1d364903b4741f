"""Validation utilities for URL shortener."""

from typing import Any, Tuple

from ..errors import InvalidURLError


def is_valid_url(url: Any) -> Tuple[bool, str]:
    """Validate a URL submitted for shortening.

    Only presence is checked: any non-empty string is accepted and stored
    exactly as given.

    Args:
        url: The submitted value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(url, str):
        return False, "URL must be a string"

    if not url:
        return False, "URL is required"

    return True, ""


def require_url(url: Any) -> str:
    """Return url if valid, otherwise raise InvalidURLError."""
    is_valid, error = is_valid_url(url)
    if not is_valid:
        raise InvalidURLError(error)
    return url
