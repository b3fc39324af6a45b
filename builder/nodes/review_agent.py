"""Review step: improves all three artifacts in one JSON round trip.

The step never fails the run. When the provider is unavailable or the
answer is not a JSON object, the pre-review artifacts pass through unchanged.
"""

import structlog

from shared.models import BuildStatus

from ..llm import GenerationError, GenerationParams, RetryPolicy, parse_json_object
from ..state import BuildState
from .base import AgentStep

logger = structlog.get_logger()

PASS_THROUGH_MESSAGE = (
    "The review service ran into a problem (for example a usage limit). "
    "Publishing the current version."
)


class ReviewAgent(AgentStep):
    name = "review_agent"
    agent_name = "Review Agent"
    status = BuildStatus.REVIEW_AGENT
    start_message = "Reviewing the code to make sure everything is right"
    done_message = "Reviewed and improved the code, ready to publish"

    def __init__(self, *args, policy: RetryPolicy | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.policy = policy or RetryPolicy.review()

    async def execute(self, state: BuildState) -> dict:
        client, registry = self._require_generation()
        project_id = state["project_id"]
        current = {"html": state["html"], "css": state["css"], "js": state["js"]}

        async def on_event(message: str) -> None:
            await self.log(project_id, message)

        prompt = registry.render("review", self.context(state))
        try:
            result = await client.generate(
                prompt,
                params=GenerationParams.review(),
                policy=self.policy,
                on_event=on_event,
            )
        except GenerationError as e:
            logger.warning(
                "review_unavailable",
                error=str(e),
                error_type=type(e).__name__,
                status_code=e.status_code,
            )
            return {**current, "reviewed": False}

        parsed = parse_json_object(result.text)
        if parsed is None:
            logger.warning("review_unparseable", preview=result.text[:200])
            return {**current, "reviewed": False}

        reviewed = {}
        for key, previous in current.items():
            value = parsed.get(key)
            reviewed[key] = value if isinstance(value, str) and value.strip() else previous
        logger.info(
            "review_applied",
            changed=[key for key in current if reviewed[key] != current[key]],
        )
        return {**reviewed, "reviewed": True}

    def completion_message(self, updates: dict) -> str:
        return self.done_message if updates.get("reviewed") else PASS_THROUGH_MESSAGE
