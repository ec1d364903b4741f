"""Common utilities for URL shortener."""

from .validators import is_valid_url, require_url
from .headers import build_base_url
from .url_builder import build_short_url
from .redirects import has_explicit_scheme, normalize_redirect_target
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "require_url",
    "build_base_url",
    "build_short_url",
    "has_explicit_scheme",
    "normalize_redirect_target",
    "setup_logging",
    "get_logger",
]
