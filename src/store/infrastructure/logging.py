"""Structlog configuration for the membership store.

Configures structlog with colored console output for development
and JSON output for production.
"""

import os
import sys

import structlog

from infrastructure.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog with appropriate processors.

    Uses JSON output when ``settings.log_json`` is true. When it is unset,
    colored console output is used if FORCE_COLOR is set or stdout is a TTY,
    and JSON otherwise. Debug level events are dropped unless
    ``settings.debug`` is enabled.
    """
    settings = settings or get_settings()

    if settings.log_json is None:
        # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
        force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
        use_colors = force_color or sys.stdout.isatty()
    else:
        use_colors = not settings.log_json

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    # 10 == logging.DEBUG, 20 == logging.INFO
    min_level = 10 if settings.debug else 20

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
