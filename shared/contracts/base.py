from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base for wire DTOs: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AgentMessage(BaseModel):
    """One entry of a project's append-only agent message log."""

    agent: str
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
