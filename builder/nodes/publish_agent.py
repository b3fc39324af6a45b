"""Publish step: marks the project published and completed."""

from shared.models import BuildStatus

from ..config.constants import Progress
from ..state import BuildState
from .base import AgentStep


class PublishAgent(AgentStep):
    name = "publish_agent"
    agent_name = "Publish Agent"
    status = BuildStatus.PUBLISH_AGENT
    start_message = "Publishing the project now"
    done_message = "Published successfully! The project is live"

    async def execute(self, state: BuildState) -> dict:
        await self.store.update(
            state["project_id"],
            {
                "is_published": True,
                "ai_agents_status": BuildStatus.COMPLETED.value,
                "ai_agents_progress": Progress.CHECKPOINTS[BuildStatus.COMPLETED],
            },
        )
        return {"published": True}
