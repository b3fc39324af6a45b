"""Generation error taxonomy.

Providers raise these; the generation client decides which ones are
recoverable (quota -> rotate and retry, other -> fallback provider).
"""


class GenerationError(Exception):
    """Base class for generation failures."""

    def __init__(self, message: str, provider: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class QuotaExhaustedError(GenerationError):
    """Provider signaled rate limiting / quota exhaustion (HTTP 429)."""


class PaymentRequiredError(GenerationError):
    """Provider account is out of credit (HTTP 402)."""


class ProviderResponseError(GenerationError):
    """Provider returned a non-2xx status or the request failed in transit."""


class MalformedResponseError(GenerationError):
    """Provider answered 2xx but without the expected content field."""


class ProviderNotConfiguredError(GenerationError):
    """No credential is configured for the provider."""
