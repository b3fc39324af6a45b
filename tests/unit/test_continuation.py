"""Tests for the incremental edit service."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from builder.continuation import DEFAULT_SUCCESS_MESSAGE, ContinuationService
from builder.llm import (
    MalformedResponseError,
    PaymentRequiredError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    QuotaExhaustedError,
)
from shared.contracts import CodeBundle, ContinueErrorCode, ContinueRequest
from tests.mocks import OWNER_ID, PROJECT_ID, InMemoryProjectStore

CURRENT = CodeBundle(html="<h1>Old</h1>", css="h1{color:red}", js="")


def _request(message: str = "make the heading blue") -> ContinueRequest:
    return ContinueRequest(project_id=PROJECT_ID, message=message, current_code=CURRENT)


def _provider(answer=None, error: Exception | None = None) -> MagicMock:
    provider = MagicMock()
    provider.complete = AsyncMock(return_value=answer, side_effect=error)
    return provider


@pytest.fixture
def store():
    return InMemoryProjectStore(
        [
            {
                "id": PROJECT_ID,
                "owner_id": OWNER_ID,
                "html_code": CURRENT.html,
                "css_code": CURRENT.css,
                "js_code": CURRENT.js,
            }
        ]
    )


@pytest.mark.asyncio
async def test_applied_edit_is_written_back(store):
    answer = json.dumps(
        {
            "html": "<h1>Old</h1>",
            "css": "h1{color:blue}",
            "js": "",
            "message": "Heading is blue now",
        }
    )
    service = ContinuationService(store, _provider(answer))

    response = await service.apply(_request())

    assert response.success
    assert response.code.css == "h1{color:blue}"
    assert response.message == "Heading is blue now"
    project = store.projects[PROJECT_ID]
    assert project["css_code"] == "h1{color:blue}"
    last = store.messages(PROJECT_ID)[-1]
    assert (last["agent"], last["message"]) == ("Continue Agent", "Heading is blue now")


@pytest.mark.asyncio
async def test_missing_fields_keep_current_code(store):
    service = ContinuationService(store, _provider('{"css": "h1{color:blue}"}'))

    response = await service.apply(_request())

    assert response.success
    assert response.code == CodeBundle(html=CURRENT.html, css="h1{color:blue}", js=CURRENT.js)
    assert response.message == DEFAULT_SUCCESS_MESSAGE


@pytest.mark.asyncio
async def test_json_is_recovered_from_chatter(store):
    answer = 'Sure! Here you go:\n{"html": "<h1>New</h1>", "message": "Renamed"}\nEnjoy.'
    service = ContinuationService(store, _provider(answer))

    response = await service.apply(_request())

    assert response.success
    assert response.code.html == "<h1>New</h1>"


@pytest.mark.asyncio
async def test_unparseable_answer_is_internal_error(store):
    service = ContinuationService(store, _provider("I changed the colour for you."))

    response = await service.apply(_request())

    assert not response.success
    assert response.error_code == ContinueErrorCode.INTERNAL_ERROR
    assert response.error_message == "Could not parse AI response - JSON format invalid"
    assert store.updates == []


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (QuotaExhaustedError("429", provider="ai_gateway", status_code=429), ContinueErrorCode.RATE_LIMIT),
        (PaymentRequiredError("402", provider="ai_gateway", status_code=402), ContinueErrorCode.PAYMENT_REQUIRED),
        (ProviderResponseError("500", provider="ai_gateway", status_code=500), ContinueErrorCode.AI_ERROR),
        (ProviderNotConfiguredError("no key", provider="ai_gateway"), ContinueErrorCode.CONFIG),
        (MalformedResponseError("empty", provider="ai_gateway"), ContinueErrorCode.INTERNAL_ERROR),
    ],
)
@pytest.mark.asyncio
async def test_provider_errors_map_to_codes(store, error, code):
    service = ContinuationService(store, _provider(error=error))

    response = await service.apply(_request())

    assert not response.success
    assert response.error_code == code
    assert response.error_message
    assert store.updates == []


@pytest.mark.asyncio
async def test_unexpected_failure_is_internal_error(store):
    store.fail_update = ConnectionError("database unavailable")
    service = ContinuationService(store, _provider('{"html": "<h1>New</h1>"}'))

    response = await service.apply(_request())

    assert response.error_code == ContinueErrorCode.INTERNAL_ERROR
    assert response.error_message == "database unavailable"


@pytest.mark.asyncio
async def test_stale_code_is_rejected_when_configured(store):
    store.projects[PROJECT_ID]["html_code"] = "<h1>Edited elsewhere</h1>"
    provider = _provider('{"html": "<h1>New</h1>"}')
    service = ContinuationService(store, provider, conflict_policy="reject_stale")

    response = await service.apply(_request())

    assert response.error_code == ContinueErrorCode.CONFLICT
    provider.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_stale_code_overwrites_by_default(store):
    store.projects[PROJECT_ID]["html_code"] = "<h1>Edited elsewhere</h1>"
    service = ContinuationService(store, _provider('{"html": "<h1>New</h1>"}'))

    response = await service.apply(_request())

    assert response.success
    assert store.projects[PROJECT_ID]["html_code"] == "<h1>New</h1>"


@pytest.mark.asyncio
async def test_prompt_carries_code_and_request(store):
    provider = _provider('{"html": "<h1>New</h1>"}')
    service = ContinuationService(store, provider)

    await service.apply(_request("add a footer"))

    prompt = provider.complete.await_args.args[0]
    assert "User request: add a footer" in prompt
    assert CURRENT.css in prompt
    assert "RTL" in prompt


def test_wire_shape_uses_camel_case():
    request = ContinueRequest.model_validate(
        {"projectId": PROJECT_ID, "message": "hi", "currentCode": {"html": "<p>x</p>"}}
    )
    assert request.current_code.css == ""
