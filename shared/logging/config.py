"""structlog setup for the builder API and CLI.

Every event carries ``service`` plus whatever build context is bound at the
time (``correlation_id``, ``project_id``, ``step``). Provider credentials
are masked before rendering: Gemini keys travel as the ``key`` query
parameter and show up in transport error messages.
"""

import logging
import re
import sys
from typing import Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# One INFO line per outgoing provider request otherwise
NOISY_LOGGERS = ("httpx", "httpcore", "openai")

SECRET_FIELDS = frozenset({"api_key", "secret", "authorization"})
MASK = "***"
_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")


def redact_credentials(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Mask credential fields and ``key=`` query parameters in string values."""
    for field, value in event_dict.items():
        if field in SECRET_FIELDS and value:
            event_dict[field] = MASK
        elif isinstance(value, str) and "key=" in value:
            event_dict[field] = _KEY_PARAM.sub(rf"\g<1>{MASK}", value)
    return event_dict


def _processors(log_format: str) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_credentials,
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def setup_logging(
    service_name: str = "playground-builder",
    log_format: Literal["json", "console"] = "console",
    log_level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging on stdout.

    Args:
        service_name: Bound as ``service`` on every event ("builder-api", "builder-cli")
        log_format: "json" for log shipping, "console" for a terminal
        log_level: Minimum level; provider HTTP loggers never go below WARNING
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service_name)
    structlog.get_logger().debug("logging_configured", log_format=log_format, log_level=log_level)
