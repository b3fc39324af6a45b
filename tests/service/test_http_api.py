"""HTTP surface tests through the ASGI app with overridden dependencies."""

import json
from unittest.mock import AsyncMock, MagicMock

from httpx import ASGITransport, AsyncClient
import pytest
import pytest_asyncio

from builder.continuation import ContinuationService
from builder.dependencies import get_continuation_service, get_orchestrator, get_project_store
from builder.llm import GenerationClient, ProviderResponseError, QuotaExhaustedError
from builder.main import app
from builder.orchestrator import BuildOrchestrator
from tests.mocks import CODE_BY_ROLE, OWNER_ID, PROJECT_ID, ScriptedFallbackProvider, ScriptedPrimaryProvider

pytestmark = pytest.mark.service


@pytest.fixture
def gateway():
    provider = MagicMock()
    provider.complete = AsyncMock(return_value=json.dumps({"html": "<h1>New</h1>", "message": "Done"}))
    return provider


@pytest.fixture
def overrides(project_store, client, gateway):
    app.dependency_overrides[get_project_store] = lambda: project_store
    app.dependency_overrides[get_orchestrator] = lambda: BuildOrchestrator(project_store, client)
    app.dependency_overrides[get_continuation_service] = lambda: ContinuationService(project_store, gateway)
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def http(overrides):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def _build_body(**extra) -> dict:
    return {"projectId": PROJECT_ID, "idea": "a bakery landing page", "ownerId": OWNER_ID, **extra}


@pytest.mark.asyncio
async def test_health(http):
    response = await http.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_build_success(http, project_store):
    response = await http.post("/api/agents/build", json=_build_body())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["html"] == CODE_BY_ROLE["html"]
    assert body["subpagesCreated"] == 0
    assert "error" not in body
    assert project_store.projects[PROJECT_ID]["ai_agents_status"] == "completed"


@pytest.mark.asyncio
async def test_build_accepts_user_id_alias(http):
    body = _build_body()
    body["userId"] = body.pop("ownerId")

    response = await http.post("/api/agents/build", json=body)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_build_failure_is_500_with_error(project_store, rotator, sleep, overrides):
    primary = ScriptedPrimaryProvider({"html": [ProviderResponseError("500", provider="gemini")]})
    fallback = ScriptedFallbackProvider({"html": [ProviderResponseError("502", provider="ai_gateway")]})
    client = GenerationClient(rotator, primary, fallback=fallback, sleep=sleep)
    overrides[get_orchestrator] = lambda: BuildOrchestrator(project_store, client)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        response = await http.post("/api/agents/build", json=_build_body())

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "HTML Agent failed" in body["error"]


@pytest.mark.asyncio
async def test_build_validates_body(http):
    response = await http.post("/api/agents/build", json={"projectId": PROJECT_ID})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_continue_success(http, project_store):
    response = await http.post(
        "/api/agents/continue",
        json={"projectId": PROJECT_ID, "message": "rename", "currentCode": {"html": "<h1>Old</h1>"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["code"]["html"] == "<h1>New</h1>"
    assert body["message"] == "Done"
    assert project_store.projects[PROJECT_ID]["html_code"] == "<h1>New</h1>"


@pytest.mark.asyncio
async def test_continue_rate_limit_is_reported_in_body(http, gateway):
    gateway.complete.side_effect = QuotaExhaustedError("429", provider="ai_gateway", status_code=429)

    response = await http.post(
        "/api/agents/continue",
        json={"projectId": PROJECT_ID, "message": "rename", "currentCode": {}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["errorCode"] == "RATE_LIMIT"
    assert body["errorMessage"]


@pytest.mark.asyncio
async def test_progress_unknown_project(http):
    response = await http.get("/api/projects/33333333-3333-3333-3333-333333333333/progress")

    assert response.status_code == 404
    assert response.json() == {"detail": "Project not found"}


@pytest.mark.asyncio
async def test_progress_after_build(http):
    await http.post("/api/agents/build", json=_build_body())

    response = await http.get(f"/api/projects/{PROJECT_ID}/progress")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == PROJECT_ID
    assert body["status"] == "completed"
    assert body["progress"] == 100
    assert body["isPublished"] is True
    assert body["messages"][0]["agent"] == "HTML Agent"
    assert "updatedAt" in body


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(http):
    response = await http.get("/health", headers={"X-Correlation-ID": "req_fixed"})
    assert response.headers["X-Correlation-ID"] == "req_fixed"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(http):
    response = await http.get("/health")
    assert response.headers["X-Correlation-ID"].startswith("req_")
