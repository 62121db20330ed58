"""
Structured Logging Configuration
Builder logging with structlog, rendered through stdlib handlers.

Console output is human-readable unless ``json_logs`` is set. A log file,
when configured, always receives one JSON object per line so saved
sessions can be replayed or grepped by ``page_id`` / ``component_id``.
With a file and a plain console, the console shows event names only.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _json_formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(JSON_FORMAT)


def _build_handlers(json_logs: bool, log_file: str | Path | None) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_json_formatter() if json_logs else logging.Formatter(CONSOLE_FORMAT))
    handlers: list[logging.Handler] = [console]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(_json_formatter())
        handlers.append(file_handler)
    return handlers


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure structured logging for the builder.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON formatter on the console
        log_file: Optional path that receives JSON lines
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, handlers=_build_handlers(json_logs, log_file), force=True)

    # Event fields travel to the handlers as record attributes, so the JSON
    # formatter emits them as top-level keys.
    structured = json_logs or bool(log_file)
    final: Any = (
        structlog.stdlib.render_to_log_kwargs
        if structured
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            final,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Any) -> None:
    """Configure logging from a ``Settings`` instance."""
    configure_logging(
        level=settings.log_level,
        json_logs=settings.json_logs,
        log_file=settings.log_file,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class LogContext:
    """
    Bind fields (``page_id``, ``storage``, ...) to every event in scope.

    Contexts nest: leaving an inner context restores the outer values.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
