"""Request and build context bound into every log event.

Each helper is a context manager; on exit the previous values are restored,
so a finished request or build never leaks its ids into the next one.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import uuid

import structlog

CORRELATION_HEADER = "X-Correlation-ID"


def new_correlation_id() -> str:
    return f"req_{uuid.uuid4().hex[:8]}"


@contextmanager
def request_context(correlation_id: str, method: str, path: str) -> Iterator[None]:
    with structlog.contextvars.bound_contextvars(
        correlation_id=correlation_id, method=method, path=path
    ):
        yield


@contextmanager
def project_context(project_id: str) -> Iterator[None]:
    """Attach the project being built or edited."""
    with structlog.contextvars.bound_contextvars(project_id=project_id):
        yield


@contextmanager
def step_context(step: str, project_id: str | None = None) -> Iterator[None]:
    """Attach the running pipeline step, and its project when not bound yet."""
    fields = {"step": step}
    if project_id and "project_id" not in structlog.contextvars.get_contextvars():
        fields["project_id"] = project_id
    with structlog.contextvars.bound_contextvars(**fields):
        yield
