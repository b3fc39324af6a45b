"""Centralized constants for the builder service.

Decoding parameters, progress checkpoints and timeouts, with environment
variable overrides where operators are expected to tune them.
"""

import os

from shared.models import BuildStatus


class Progress:
    """Progress percentage written when a status is entered."""

    CHECKPOINTS: dict[BuildStatus, int] = {
        BuildStatus.HTML_AGENT: 10,
        BuildStatus.CSS_AGENT: 35,
        BuildStatus.JS_AGENT: 60,
        BuildStatus.REVIEW_AGENT: 80,
        BuildStatus.PUBLISH_AGENT: 95,
        BuildStatus.COMPLETED: 100,
    }


class Decoding:
    """Generation parameters per role."""

    CREATIVE_TEMPERATURE = 0.7
    REVIEW_TEMPERATURE = 0.3
    TOP_K = 40
    TOP_P = 0.95
    MAX_OUTPUT_TOKENS = 8192
    SUBPAGE_MAX_TOKENS = 16000


class Timeouts:
    """Timeout values in seconds."""

    PROVIDER_REQUEST = float(os.getenv("PROVIDER_REQUEST_TIMEOUT", "300"))
    PROVIDER_CONNECT = float(os.getenv("PROVIDER_CONNECT_TIMEOUT", "10"))


class Credentials:
    """Environment naming of the primary provider's credential pool."""

    # Index 1 is GEMINI_API_KEY, index n > 1 is GEMINI_API_KEY_<n>
    POOL_ENV_PREFIX = "GEMINI_API_KEY"
