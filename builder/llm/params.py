"""Decoding parameters and retry policies."""

from dataclasses import dataclass

from ..config.constants import Decoding


@dataclass(frozen=True)
class GenerationParams:
    """Decoding parameters sent with every completion request."""

    temperature: float = Decoding.CREATIVE_TEMPERATURE
    max_output_tokens: int = Decoding.MAX_OUTPUT_TOKENS
    top_k: int = Decoding.TOP_K
    top_p: float = Decoding.TOP_P

    @classmethod
    def creative(cls) -> "GenerationParams":
        return cls()

    @classmethod
    def review(cls) -> "GenerationParams":
        return cls(temperature=Decoding.REVIEW_TEMPERATURE)


@dataclass(frozen=True)
class RetryPolicy:
    """How hard the generation client tries before giving up.

    ``max_attempts`` counts primary-provider calls; every quota error except
    the last rotates the key. The delay before attempt ``n + 1`` is
    ``backoff_seconds * n``.
    """

    max_attempts: int = 2
    backoff_seconds: float = 0.0
    allow_fallback: bool = True

    @classmethod
    def creative(cls) -> "RetryPolicy":
        return cls()

    @classmethod
    def review(cls, max_attempts: int = 3, backoff_seconds: float = 1.5) -> "RetryPolicy":
        return cls(max_attempts=max_attempts, backoff_seconds=backoff_seconds, allow_fallback=False)
