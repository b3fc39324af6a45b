"""Contracts for the build and continuation entry points."""

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, Field

from .base import AgentMessage, CamelModel


class CodeBundle(CamelModel):
    """The three source artifacts of a project."""

    html: str = ""
    css: str = ""
    js: str = ""


class BuildRequest(CamelModel):
    """Start an AI build for a project."""

    project_id: str = Field(alias="projectId", min_length=1)
    idea: str = Field(min_length=1)
    owner_id: str = Field(
        alias="ownerId",
        validation_alias=AliasChoices("ownerId", "userId", "owner_id"),
        min_length=1,
    )


class BuildResponse(CamelModel):
    """Result of a build run."""

    success: bool
    html: str | None = None
    css: str | None = None
    js: str | None = None
    subpages_created: int | None = Field(default=None, alias="subpagesCreated")
    error: str | None = None


class ContinueErrorCode(str, Enum):
    """Failure categories the editor UI renders differently."""

    RATE_LIMIT = "RATE_LIMIT"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    AI_ERROR = "AI_ERROR"
    CONFIG = "CONFIG"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ContinueRequest(CamelModel):
    """Incremental edit request from the chat-style editor."""

    project_id: str = Field(alias="projectId", min_length=1)
    message: str = Field(min_length=1)
    current_code: CodeBundle = Field(alias="currentCode")


class ContinueResponse(CamelModel):
    """Result of an edit request."""

    success: bool
    code: CodeBundle | None = None
    message: str | None = None
    error_code: ContinueErrorCode | None = Field(default=None, alias="errorCode")
    error_message: str | None = Field(default=None, alias="errorMessage")


class ProjectProgress(CamelModel):
    """Snapshot of a project's build state for pollers."""

    id: str
    status: str | None = None
    progress: int = 0
    is_published: bool = Field(default=False, alias="isPublished")
    messages: list[AgentMessage] = []
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
