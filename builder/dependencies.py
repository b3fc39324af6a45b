"""Wiring of stores, providers and services.

The ``build_*`` functions assemble services from settings and are shared by
the API and the CLI; the ``get_*`` functions are the FastAPI dependencies.
"""

from datetime import timedelta
from functools import lru_cache

from .config import Settings, get_settings
from .continuation import ContinuationService
from .credentials import CredentialPool, CredentialRotator
from .database import get_session_maker
from .llm import GatewayProvider, GeminiProvider, GenerationClient, RetryPolicy
from .nodes import ReviewAgent
from .orchestrator import BuildOrchestrator, default_steps
from .prompts import default_registry
from .stores import CredentialStore, ProjectStore, SqlCredentialStore, SqlProjectStore
from .subpages import SubpageGenerator


@lru_cache
def get_gemini_provider() -> GeminiProvider:
    """Process-wide primary provider (owns a pooled HTTP client)."""
    settings = get_settings()
    return GeminiProvider(model=settings.gemini_model, base_url=settings.gemini_base_url)


def build_gateway_provider(settings: Settings) -> GatewayProvider:
    return GatewayProvider(
        api_key=settings.ai_gateway_api_key,
        base_url=settings.ai_gateway_url,
        model=settings.ai_gateway_model,
    )


def build_rotator(settings: Settings, credential_store: CredentialStore) -> CredentialRotator:
    pool = CredentialPool.from_environ(primary=settings.gemini_api_key or None)
    return CredentialRotator(
        credential_store,
        pool,
        service=settings.rotation_service_name,
        interval=timedelta(seconds=settings.rotation_interval_seconds),
    )


def build_orchestrator(
    settings: Settings,
    project_store: ProjectStore,
    credential_store: CredentialStore,
    primary: GeminiProvider | None = None,
) -> BuildOrchestrator:
    gateway = build_gateway_provider(settings)
    client = GenerationClient(
        build_rotator(settings, credential_store),
        primary or get_gemini_provider(),
        fallback=gateway,
    )
    registry = default_registry()
    locale = {"language": settings.site_language, "direction": settings.site_direction}
    review = ReviewAgent(
        project_store,
        client,
        registry,
        policy=RetryPolicy.review(settings.review_max_attempts, settings.review_backoff_seconds),
        **locale,
    )
    subpages = SubpageGenerator(
        project_store,
        gateway,
        fallback_routes=settings.subpage_fallback_routes
        if settings.subpage_fallback_routes_enabled
        else None,
        min_chars=settings.subpage_min_chars,
        context_chars=settings.subpage_context_chars,
        **locale,
    )
    return BuildOrchestrator(
        project_store,
        client,
        subpages=subpages,
        steps=default_steps(project_store, client, registry, review_agent=review, **locale),
    )


def build_continuation_service(settings: Settings, project_store: ProjectStore) -> ContinuationService:
    return ContinuationService(
        project_store,
        build_gateway_provider(settings),
        conflict_policy=settings.continuation_conflict_policy,
        direction=settings.site_direction,
    )


def get_project_store() -> ProjectStore:
    return SqlProjectStore(get_session_maker())


def get_credential_store() -> CredentialStore:
    return SqlCredentialStore(get_session_maker())


@lru_cache
def get_orchestrator() -> BuildOrchestrator:
    """Process-wide orchestrator; the step graph is compiled once."""
    return build_orchestrator(get_settings(), get_project_store(), get_credential_store())


def get_continuation_service() -> ContinuationService:
    return build_continuation_service(get_settings(), get_project_store())
