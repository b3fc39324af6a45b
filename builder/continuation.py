"""Incremental edits of an existing site through the AI gateway.

Every outcome is a structured ``ContinueResponse``; provider failures are
mapped to error codes the editor renders differently.
"""

from typing import Literal

import structlog

from shared.contracts import CodeBundle, ContinueErrorCode, ContinueRequest, ContinueResponse
from shared.logging import project_context

from .llm import (
    GatewayProvider,
    GenerationError,
    MalformedResponseError,
    PaymentRequiredError,
    ProviderNotConfiguredError,
    QuotaExhaustedError,
    parse_json_object,
)
from .prompts import CONTINUATION_SYSTEM_PROMPT, build_continuation_prompt
from .stores import ProjectStore

logger = structlog.get_logger()

AGENT_NAME = "Continue Agent"
DEFAULT_SUCCESS_MESSAGE = "Changes applied successfully"

ERROR_MESSAGES = {
    ContinueErrorCode.RATE_LIMIT: "Too many requests right now. Please wait a moment and try again.",
    ContinueErrorCode.PAYMENT_REQUIRED: "AI credit is exhausted. Please top up to keep editing.",
    ContinueErrorCode.AI_ERROR: "The AI service could not process this request.",
    ContinueErrorCode.CONFIG: "AI configuration is missing",
    ContinueErrorCode.CONFLICT: "The project changed since this code was loaded. Reload and try again.",
}

ConflictPolicy = Literal["last_writer_wins", "reject_stale"]


def _failure(code: ContinueErrorCode, message: str | None = None) -> ContinueResponse:
    return ContinueResponse(
        success=False,
        error_code=code,
        error_message=message or ERROR_MESSAGES[code],
    )


def _stored_code(project: dict) -> CodeBundle:
    return CodeBundle(
        html=project.get("html_code") or "",
        css=project.get("css_code") or "",
        js=project.get("js_code") or "",
    )


def _field(result: dict, key: str, fallback: str) -> str:
    value = result.get(key)
    return value if isinstance(value, str) and value else fallback


class ContinuationService:
    """Applies one chat edit request to a project's code."""

    def __init__(
        self,
        store: ProjectStore,
        provider: GatewayProvider,
        conflict_policy: ConflictPolicy = "last_writer_wins",
        direction: str = "rtl",
    ):
        self.store = store
        self.provider = provider
        self.conflict_policy = conflict_policy
        self.direction = direction

    async def apply(self, request: ContinueRequest) -> ContinueResponse:
        """Run the edit. Never raises."""
        with project_context(request.project_id):
            try:
                return await self._apply(request)
            except Exception as e:
                logger.error(
                    "continuation_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                return _failure(ContinueErrorCode.INTERNAL_ERROR, str(e) or "Unknown error")

    async def _apply(self, request: ContinueRequest) -> ContinueResponse:
        current = request.current_code
        logger.info("continuation_requested", message_length=len(request.message))

        if self.conflict_policy == "reject_stale":
            project = await self.store.get(request.project_id)
            if project is not None and _stored_code(project) != current:
                logger.warning("continuation_stale_code")
                return _failure(ContinueErrorCode.CONFLICT)

        prompt = build_continuation_prompt(
            current.html, current.css, current.js, request.message, direction=self.direction
        )
        try:
            text = await self.provider.complete(prompt, system_prompt=CONTINUATION_SYSTEM_PROMPT)
        except ProviderNotConfiguredError:
            logger.error("continuation_gateway_not_configured")
            return _failure(ContinueErrorCode.CONFIG)
        except QuotaExhaustedError:
            return _failure(ContinueErrorCode.RATE_LIMIT)
        except PaymentRequiredError:
            return _failure(ContinueErrorCode.PAYMENT_REQUIRED)
        except MalformedResponseError as e:
            return _failure(ContinueErrorCode.INTERNAL_ERROR, str(e))
        except GenerationError as e:
            logger.warning(
                "continuation_provider_error",
                status_code=e.status_code,
                error=str(e),
            )
            return _failure(ContinueErrorCode.AI_ERROR)

        result = parse_json_object(text)
        if result is None:
            logger.error("continuation_unparseable", preview=text[:500])
            return _failure(
                ContinueErrorCode.INTERNAL_ERROR,
                "Could not parse AI response - JSON format invalid",
            )

        code = CodeBundle(
            html=_field(result, "html", current.html),
            css=_field(result, "css", current.css),
            js=_field(result, "js", current.js),
        )
        message = _field(result, "message", DEFAULT_SUCCESS_MESSAGE)

        await self.store.update(
            request.project_id,
            {"html_code": code.html, "css_code": code.css, "js_code": code.js},
        )
        await self.store.append_message(request.project_id, AGENT_NAME, message)

        logger.info("continuation_applied")
        return ContinueResponse(success=True, code=code, message=message)
