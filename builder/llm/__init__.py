"""Text generation providers and the rotating, falling-back client."""

from .client import GenerationClient, GenerationResult
from .errors import (
    GenerationError,
    MalformedResponseError,
    PaymentRequiredError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    QuotaExhaustedError,
)
from .factory import LLMFactory
from .gateway import GatewayProvider
from .gemini import GeminiProvider
from .params import GenerationParams, RetryPolicy
from .text import parse_json_object, strip_code_fences

__all__ = [
    "GatewayProvider",
    "GeminiProvider",
    "GenerationClient",
    "GenerationError",
    "GenerationParams",
    "GenerationResult",
    "LLMFactory",
    "MalformedResponseError",
    "PaymentRequiredError",
    "ProviderNotConfiguredError",
    "ProviderResponseError",
    "QuotaExhaustedError",
    "RetryPolicy",
    "parse_json_object",
    "strip_code_fences",
]
