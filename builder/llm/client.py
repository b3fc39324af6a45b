"""Generation client: primary provider with key rotation, then fallback.

Quota errors (429) rotate the primary key and retry until the policy's
attempt cap. Any other primary failure ends the primary loop at once; it,
or quota exhaustion on the last attempt, goes to the fallback provider
once when the policy allows it.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

import structlog

from ..credentials import CredentialRotator
from .errors import GenerationError, QuotaExhaustedError
from .params import GenerationParams, RetryPolicy
from .text import strip_code_fences

logger = structlog.get_logger()

EventSink = Callable[[str], Awaitable[None]]


class PrimaryProvider(Protocol):
    name: str

    async def complete(self, prompt: str, params: GenerationParams, api_key: str) -> str: ...


class FallbackProvider(Protocol):
    name: str

    async def complete(self, prompt: str, params: GenerationParams | None = None) -> str: ...


@dataclass(frozen=True)
class GenerationResult:
    """Fence-stripped output plus how it was obtained."""

    text: str
    provider: str
    key_index: int | None = None
    rotations: int = 0
    used_fallback: bool = False


class GenerationClient:
    """Stateless apart from the rotation calls it makes."""

    def __init__(
        self,
        rotator: CredentialRotator,
        primary: PrimaryProvider,
        fallback: FallbackProvider | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.rotator = rotator
        self.primary = primary
        self.fallback = fallback
        self._sleep = sleep

    async def generate(
        self,
        prompt: str,
        params: GenerationParams | None = None,
        policy: RetryPolicy | None = None,
        on_event: EventSink | None = None,
    ) -> GenerationResult:
        """Generate text for ``prompt``.

        Args:
            prompt: Full prompt text
            params: Decoding parameters (creative defaults if omitted)
            policy: Attempt cap, backoff and fallback permission
            on_event: Async callback receiving human-readable rotation and
                fallback notices

        Returns:
            GenerationResult with code fences stripped

        Raises:
            GenerationError: when every attempt (and the fallback) failed
        """
        params = params or GenerationParams.creative()
        policy = policy or RetryPolicy.creative()

        credential = await self.rotator.current_credential()
        rotations = 0
        last_error: GenerationError | None = None

        for attempt in range(1, policy.max_attempts + 1):
            try:
                text = await self.primary.complete(prompt, params, credential.secret)
            except QuotaExhaustedError as e:
                last_error = e
                logger.warning(
                    "provider_quota_exhausted",
                    provider=self.primary.name,
                    key_index=credential.index,
                    attempt=attempt,
                )
                if attempt == policy.max_attempts:
                    break
                credential = await self.rotator.advance_on_exhaustion(credential.index)
                rotations += 1
                await _emit(on_event, f"Quota exhausted, switched to API key #{credential.index}")
            except GenerationError as e:
                last_error = e
                logger.warning(
                    "provider_call_failed",
                    provider=self.primary.name,
                    key_index=credential.index,
                    attempt=attempt,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                # Only quota errors are retried
                break
            else:
                return GenerationResult(
                    text=strip_code_fences(text),
                    provider=self.primary.name,
                    key_index=credential.index,
                    rotations=rotations,
                )

            if policy.backoff_seconds > 0:
                await self._sleep(policy.backoff_seconds * attempt)

        if last_error is None:
            raise GenerationError(
                f"Retry policy allows no attempts (max_attempts={policy.max_attempts})",
                provider=self.primary.name,
            )
        if not policy.allow_fallback or self.fallback is None:
            raise last_error

        logger.info(
            "using_fallback_provider",
            primary=self.primary.name,
            fallback=self.fallback.name,
            reason=type(last_error).__name__,
        )
        await _emit(on_event, "Primary provider unavailable, using the backup model")
        text = await self.fallback.complete(prompt, params)
        return GenerationResult(
            text=strip_code_fences(text),
            provider=self.fallback.name,
            rotations=rotations,
            used_fallback=True,
        )


async def _emit(sink: EventSink | None, message: str) -> None:
    if sink is not None:
        await sink(message)
