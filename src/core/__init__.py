"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    PageValidator,
    validate_json_depth,
    validate_page_data,
)
from .logging_config import configure_logging, configure_from_settings, get_logger, LogContext
from .json import (
    parse_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
)


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "PageValidator",
    "validate_json_depth",
    "validate_page_data",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "parse_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    # DI
    "create_container",
]
