"""HTTP-level tests for the Gemini provider."""

import json

import httpx
import pytest
import pytest_asyncio
import respx

from builder.llm import (
    GeminiProvider,
    GenerationParams,
    MalformedResponseError,
    PaymentRequiredError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    QuotaExhaustedError,
)

BASE_URL = "https://gemini.test"
PATH = "/v1beta/models/gemini-test:generateContent"


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest_asyncio.fixture
async def provider():
    provider = GeminiProvider(model="gemini-test", base_url=BASE_URL)
    yield provider
    await provider.close()


@pytest.mark.asyncio
async def test_complete_sends_prompt_and_decoding_params(provider):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        route = respx_mock.post(path=PATH).mock(
            return_value=httpx.Response(httpx.codes.OK, json=_candidate("<html></html>"))
        )

        text = await provider.complete("build a bakery site", GenerationParams.review(), "k1")

        assert text == "<html></html>"
        request = route.calls.last.request
        assert request.url.params["key"] == "k1"
        body = json.loads(request.content)
        assert body["contents"][0]["parts"][0]["text"] == "build a bakery site"
        assert body["generationConfig"] == {
            "temperature": 0.3,
            "topK": 40,
            "topP": 0.95,
            "maxOutputTokens": 8192,
        }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (httpx.codes.TOO_MANY_REQUESTS, QuotaExhaustedError),
        (httpx.codes.PAYMENT_REQUIRED, PaymentRequiredError),
        (httpx.codes.INTERNAL_SERVER_ERROR, ProviderResponseError),
        (httpx.codes.FORBIDDEN, ProviderResponseError),
    ],
)
async def test_status_codes_map_to_error_taxonomy(provider, status_code, error_type):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post(path=PATH).mock(
            return_value=httpx.Response(status_code, json={"error": {"message": "nope"}})
        )

        with pytest.raises(error_type) as exc_info:
            await provider.complete("prompt", GenerationParams(), "k1")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.provider == "gemini"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        _candidate("   "),
    ],
)
async def test_missing_text_is_malformed(provider, payload):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post(path=PATH).mock(return_value=httpx.Response(httpx.codes.OK, json=payload))

        with pytest.raises(MalformedResponseError):
            await provider.complete("prompt", GenerationParams(), "k1")


@pytest.mark.asyncio
async def test_non_json_body_is_malformed(provider):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post(path=PATH).mock(return_value=httpx.Response(httpx.codes.OK, text="<html>"))

        with pytest.raises(MalformedResponseError):
            await provider.complete("prompt", GenerationParams(), "k1")


@pytest.mark.asyncio
async def test_transport_error_is_provider_error(provider):
    async with respx.mock(base_url=BASE_URL) as respx_mock:
        respx_mock.post(path=PATH).mock(side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(ProviderResponseError):
            await provider.complete("prompt", GenerationParams(), "k1")


@pytest.mark.asyncio
async def test_empty_key_is_rejected_without_request(provider):
    async with respx.mock(base_url=BASE_URL, assert_all_called=False) as respx_mock:
        route = respx_mock.post(path=PATH)

        with pytest.raises(ProviderNotConfiguredError):
            await provider.complete("prompt", GenerationParams(), "")

        assert not route.called
