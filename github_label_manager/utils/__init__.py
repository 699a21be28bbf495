"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LABEL_COLOR,
    MAX_DESCRIPTION_LENGTH,
)
from .helpers import format_store_error
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LABEL_COLOR",
    "MAX_DESCRIPTION_LENGTH",
    "format_store_error",
    "retry_on_rate_limit",
]
