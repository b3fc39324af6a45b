"""Base agent step with common functionality.

Provides:
- Status/progress write and start/done log entries around every step
- Conversion of terminal generation failures into state errors
- Step decorator binding step and project into the log context
"""

from collections.abc import Awaitable, Callable
from functools import wraps
import time

import structlog

from shared.logging import step_context
from shared.models import BuildStatus

from ..config.constants import Progress
from ..llm import GenerationClient, GenerationError
from ..prompts import BuildContext, PromptRegistry
from ..state import BuildState
from ..stores import ProjectStore

logger = structlog.get_logger()

StepFn = Callable[[BuildState], Awaitable[dict]]

# State key -> project column
ARTIFACT_COLUMNS = {"html": "html_code", "css": "css_code", "js": "js_code"}


def log_step_execution(step_name: str) -> Callable[[StepFn], StepFn]:
    """Wrap a graph node so its events carry ``step`` and ``project_id``.

    Logs ``step_started`` and ``step_finished`` (with the updated state keys
    and whether the step recorded an error); an exception escaping the
    node is logged as ``step_crashed`` and re-raised.
    """

    def decorator(func: StepFn) -> StepFn:
        @wraps(func)
        async def wrapper(state: BuildState) -> dict:
            started = time.perf_counter()
            with step_context(step_name, state.get("project_id")):
                logger.info("step_started")
                try:
                    updates = await func(state)
                except Exception as e:
                    logger.error(
                        "step_crashed",
                        duration_ms=_elapsed_ms(started),
                        error=str(e),
                        error_type=type(e).__name__,
                        exc_info=True,
                    )
                    raise
                logger.info(
                    "step_finished",
                    duration_ms=_elapsed_ms(started),
                    updated=sorted(updates),
                    failed=bool(updates.get("errors")),
                )
                return updates

        return wrapper

    return decorator


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class AgentStep:
    """Base class for the build pipeline steps.

    Subclasses set the class attributes and implement ``execute``. ``run``
    handles the bookkeeping every step shares:

    1. write ``ai_agents_status`` and the entry progress
    2. append the start log entry
    3. execute, then persist the artifact columns and append the done entry

    A ``GenerationError`` escaping ``execute`` ends the run: an error log
    entry is appended and the error is recorded in the state. Already
    persisted status and artifacts are left as they are.
    """

    name: str = ""
    agent_name: str = ""
    status: BuildStatus
    start_message: str = ""
    done_message: str = ""

    def __init__(
        self,
        store: ProjectStore,
        client: GenerationClient | None = None,
        registry: PromptRegistry | None = None,
        language: str = "ar",
        direction: str = "rtl",
    ):
        self.store = store
        self.client = client
        self.registry = registry
        self.language = language
        self.direction = direction

    @property
    def entry_progress(self) -> int:
        return Progress.CHECKPOINTS[self.status]

    def as_node(self) -> StepFn:
        """Graph node callable with structured logging around ``run``."""
        return log_step_execution(self.name)(self.run)

    async def run(self, state: BuildState) -> dict:
        project_id = state["project_id"]

        await self.store.update(
            project_id,
            {"ai_agents_status": self.status.value, "ai_agents_progress": self.entry_progress},
        )
        await self.log(project_id, self.start_message)

        try:
            updates = await self.execute(state)
        except GenerationError as e:
            logger.error(
                "agent_step_failed",
                step=self.name,
                provider=e.provider,
                status_code=e.status_code,
                error=str(e),
                error_type=type(e).__name__,
            )
            message = f"{self.agent_name} failed: {e}"
            await self.log(project_id, message)
            return {"errors": [message]}

        artifacts = {
            column: updates[key] for key, column in ARTIFACT_COLUMNS.items() if key in updates
        }
        if artifacts:
            await self.store.update(project_id, artifacts)
        await self.log(project_id, self.completion_message(updates))
        return updates

    async def execute(self, state: BuildState) -> dict:
        raise NotImplementedError

    def completion_message(self, updates: dict) -> str:
        return self.done_message

    async def log(self, project_id: str, message: str) -> None:
        await self.store.append_message(project_id, self.agent_name, message)

    def context(self, state: BuildState) -> BuildContext:
        return BuildContext(
            idea=state["idea"],
            html=state.get("html", ""),
            css=state.get("css", ""),
            js=state.get("js", ""),
            language=self.language,
            direction=self.direction,
        )

    def _require_generation(self) -> tuple[GenerationClient, PromptRegistry]:
        if self.client is None or self.registry is None:
            raise RuntimeError(f"{type(self).__name__} needs a generation client and prompt registry")
        return self.client, self.registry


class CreativeStep(AgentStep):
    """Step that generates one artifact from a role prompt."""

    role: str = ""

    async def execute(self, state: BuildState) -> dict:
        client, registry = self._require_generation()
        project_id = state["project_id"]

        async def on_event(message: str) -> None:
            await self.log(project_id, message)

        prompt = registry.render(self.role, self.context(state))
        result = await client.generate(prompt, on_event=on_event)

        logger.info(
            "artifact_generated",
            artifact=self.role,
            provider=result.provider,
            used_fallback=result.used_fallback,
            rotations=result.rotations,
            length=len(result.text),
        )
        return {self.role: result.text}
