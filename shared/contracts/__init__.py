"""Wire contracts shared by the HTTP app, the CLI and the pipeline."""

from .base import AgentMessage, CamelModel
from .builder import (
    BuildRequest,
    BuildResponse,
    CodeBundle,
    ContinueErrorCode,
    ContinueRequest,
    ContinueResponse,
    ProjectProgress,
)

__all__ = [
    "AgentMessage",
    "BuildRequest",
    "BuildResponse",
    "CamelModel",
    "CodeBundle",
    "ContinueErrorCode",
    "ContinueRequest",
    "ContinueResponse",
    "ProjectProgress",
]
