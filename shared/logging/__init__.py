from .config import redact_credentials, setup_logging
from .correlation import (
    CORRELATION_HEADER,
    new_correlation_id,
    project_context,
    request_context,
    step_context,
)

__all__ = [
    "setup_logging",
    "redact_credentials",
    "CORRELATION_HEADER",
    "new_correlation_id",
    "request_context",
    "project_context",
    "step_context",
]
