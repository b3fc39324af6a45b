"""LLM Factory for the OpenAI-compatible AI gateway.

The gateway is the fallback text provider for the build pipeline, the
subpage generator's provider and the continuation (edit) provider.
"""

import os

from langchain_openai import ChatOpenAI
import structlog

from ..config.constants import Timeouts
from .errors import ProviderNotConfiguredError

logger = structlog.get_logger()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"


class LLMFactory:
    """Factory for creating chat model instances pointed at the AI gateway."""

    @staticmethod
    def create_llm(config: dict) -> ChatOpenAI:
        """Create an LLM instance from configuration.

        Args:
            config: Dict with keys:
                - api_key: Gateway key (falls back to AI_GATEWAY_API_KEY env var)
                - base_url: Gateway URL
                - model_identifier: Model ID (e.g., "google/gemini-2.5-flash")
                - temperature: Temperature setting (optional)
                - max_tokens: Output token cap (optional)

        Returns:
            Configured ChatOpenAI instance. Client-side retries are disabled so
            rate limits surface immediately to the caller.

        Raises:
            ProviderNotConfiguredError: If no gateway key is available
        """
        api_key = config.get("api_key") or os.environ.get("AI_GATEWAY_API_KEY")
        if not api_key:
            raise ProviderNotConfiguredError(
                "AI_GATEWAY_API_KEY is not set", provider="ai_gateway"
            )

        model_id = config.get("model_identifier", DEFAULT_GATEWAY_MODEL)
        base_url = config.get("base_url", DEFAULT_GATEWAY_URL)

        logger.debug(
            "creating_llm",
            provider="ai_gateway",
            model=model_id,
            temperature=config.get("temperature"),
        )

        kwargs = {}
        if config.get("temperature") is not None:
            kwargs["temperature"] = config["temperature"]
        if config.get("max_tokens") is not None:
            kwargs["max_tokens"] = config["max_tokens"]

        return ChatOpenAI(
            base_url=base_url,
            api_key=api_key,
            model=model_id,
            max_retries=0,
            timeout=Timeouts.PROVIDER_REQUEST,
            **kwargs,
        )
