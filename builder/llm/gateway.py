"""Fallback text provider: OpenAI-compatible AI gateway via langchain-openai."""

from langchain_core.messages import HumanMessage, SystemMessage
import openai
import structlog

from .errors import (
    MalformedResponseError,
    PaymentRequiredError,
    ProviderResponseError,
    QuotaExhaustedError,
)
from .factory import DEFAULT_GATEWAY_MODEL, DEFAULT_GATEWAY_URL, LLMFactory
from .params import GenerationParams

logger = structlog.get_logger()

PROVIDER = "ai_gateway"

CODE_ONLY_SYSTEM_PROMPT = (
    "You are an agent that writes clean code without explanations. "
    "Return only the code, without any ``` markers."
)


class GatewayProvider:
    """Chat-completions client for the AI gateway."""

    name = PROVIDER

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_GATEWAY_URL,
        model: str = DEFAULT_GATEWAY_MODEL,
        system_prompt: str = CODE_ONLY_SYSTEM_PROMPT,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.system_prompt = system_prompt

    async def complete(
        self,
        prompt: str,
        params: GenerationParams | None = None,
        system_prompt: str | None = None,
    ) -> str:
        """Run one chat completion and return the raw assistant text.

        Raises:
            ProviderNotConfiguredError: if no gateway key is configured
            QuotaExhaustedError: on HTTP 429
            PaymentRequiredError: on HTTP 402
            ProviderResponseError: on other API or transport errors
            MalformedResponseError: when the reply is empty
        """
        config = {
            "api_key": self.api_key,
            "base_url": self.base_url,
            "model_identifier": self.model,
        }
        if params is not None:
            config["temperature"] = params.temperature
            config["max_tokens"] = params.max_output_tokens
        llm = LLMFactory.create_llm(config)

        messages = [
            SystemMessage(content=system_prompt or self.system_prompt),
            HumanMessage(content=prompt),
        ]

        try:
            response = await llm.ainvoke(messages)
        except openai.RateLimitError as e:
            raise QuotaExhaustedError("AI gateway rate limited", provider=PROVIDER, status_code=429) from e
        except openai.APIStatusError as e:
            if e.status_code == 402:  # noqa: PLR2004
                raise PaymentRequiredError(
                    "AI gateway credit exhausted", provider=PROVIDER, status_code=402
                ) from e
            raise ProviderResponseError(
                f"AI gateway returned HTTP {e.status_code}",
                provider=PROVIDER,
                status_code=e.status_code,
            ) from e
        except openai.APIError as e:
            raise ProviderResponseError(f"AI gateway request failed: {e}", provider=PROVIDER) from e

        content = response.content
        if not isinstance(content, str) or not content.strip():
            logger.warning("gateway_empty_content", content_type=type(content).__name__)
            raise MalformedResponseError("AI gateway returned no content", provider=PROVIDER)
        return content
