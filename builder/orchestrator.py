"""Build orchestrator: primary pipeline, then best-effort subpages.

The primary phase runs the compiled step graph. The secondary phase runs
only after a successful primary phase, inside its own error boundary, so a
subpage failure never un-publishes the parent project.
"""

import structlog

from shared.contracts import BuildRequest, BuildResponse
from shared.logging import project_context

from .graph import create_build_graph
from .llm import GenerationClient
from .nodes import AgentStep, CssAgent, HtmlAgent, JsAgent, PublishAgent, ReviewAgent
from .prompts import PromptRegistry, default_registry
from .state import BuildState, initial_state
from .stores import ProjectStore
from .subpages import SubpageGenerator

logger = structlog.get_logger()


def default_steps(
    store: ProjectStore,
    client: GenerationClient,
    registry: PromptRegistry,
    review_agent: ReviewAgent | None = None,
    language: str = "ar",
    direction: str = "rtl",
) -> list[AgentStep]:
    """HTML, CSS, JS, review and publish steps in pipeline order."""
    common = {"language": language, "direction": direction}
    return [
        HtmlAgent(store, client, registry, **common),
        CssAgent(store, client, registry, **common),
        JsAgent(store, client, registry, **common),
        review_agent or ReviewAgent(store, client, registry, **common),
        PublishAgent(store, **common),
    ]


class BuildOrchestrator:
    """Runs one build request end to end and reports a structured result."""

    def __init__(
        self,
        store: ProjectStore,
        client: GenerationClient,
        subpages: SubpageGenerator | None = None,
        registry: PromptRegistry | None = None,
        steps: list[AgentStep] | None = None,
    ):
        self.store = store
        self.subpages = subpages
        self.steps = steps or default_steps(store, client, registry or default_registry())
        self.graph = create_build_graph(self.steps)

    async def run(self, request: BuildRequest) -> BuildResponse:
        """Run the pipeline for ``request``. Never raises."""
        with project_context(request.project_id):
            return await self._run(request)

    async def _run(self, request: BuildRequest) -> BuildResponse:
        logger.info("build_started", owner_id=request.owner_id, idea_length=len(request.idea))

        try:
            final = await self.run_primary(request)
        except Exception as e:
            logger.error(
                "build_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return BuildResponse(success=False, error=str(e))

        if final["errors"]:
            logger.warning("build_aborted", errors=final["errors"])
            return BuildResponse(success=False, error="; ".join(final["errors"]))

        subpages_created = await self.run_secondary(request, final)

        logger.info(
            "build_completed",
            reviewed=final["reviewed"],
            subpages_created=subpages_created,
        )
        return BuildResponse(
            success=True,
            html=final["html"],
            css=final["css"],
            js=final["js"],
            subpages_created=subpages_created,
        )

    async def run_primary(self, request: BuildRequest) -> BuildState:
        """Ensure the project row exists, then run the step graph."""
        project = await self.store.get(request.project_id)
        if project is None:
            await self.store.insert_many(
                [
                    {
                        "id": request.project_id,
                        "owner_id": request.owner_id,
                        "project_name": request.idea[:255],
                        "ai_agents_idea": request.idea,
                    }
                ]
            )
            logger.info("project_row_created")
        else:
            await self.store.update(request.project_id, {"ai_agents_idea": request.idea})

        state = initial_state(request.project_id, request.idea, request.owner_id)
        return await self.graph.ainvoke(state)

    async def run_secondary(self, request: BuildRequest, final: BuildState) -> int:
        """Subpage materialization; failures are logged and reported as 0."""
        if self.subpages is None:
            return 0
        try:
            return await self.subpages.discover_and_materialize(
                request.project_id,
                request.idea,
                request.owner_id,
                final["html"],
                final["css"],
                final["js"],
            )
        except Exception as e:
            logger.error(
                "subpages_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            try:
                await self.store.append_message(
                    request.project_id, "Publish Agent", f"Subpage creation failed: {e}"
                )
            except Exception as log_error:
                logger.warning("subpage_failure_log_failed", error=str(log_error))
            return 0
