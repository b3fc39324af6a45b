"""Materializes subpages for the relative links of a published site.

Best-effort: per-page generation failures fall back to a canned page, and
the caller treats any exception from here as non-fatal.
"""

from collections.abc import Sequence

import structlog

from ..config.constants import Decoding
from ..llm import GatewayProvider, GenerationError, GenerationParams, strip_code_fences
from ..prompts import SUBPAGE_SYSTEM_PROMPT, build_subpage_prompt, fallback_page, page_name_from_route
from ..prompts.registry import LANGUAGE_NAMES
from ..stores import ProjectStore
from .discovery import discover_links

logger = structlog.get_logger()

AGENT_NAME = "Publish Agent"
ROOT_MARKERS = ("<!DOCTYPE", "<html")
DEFAULT_FALLBACK_ROUTES = ("/about", "/contact", "/privacy", "/terms", "/faq", "/blog")


class SubpageGenerator:
    """Discover routes, generate a page per new route, insert them in one batch."""

    def __init__(
        self,
        store: ProjectStore,
        provider: GatewayProvider,
        fallback_routes: Sequence[str] | None = DEFAULT_FALLBACK_ROUTES,
        min_chars: int = 800,
        context_chars: int = 1500,
        language: str = "ar",
        direction: str = "rtl",
    ):
        self.store = store
        self.provider = provider
        self.fallback_routes = list(fallback_routes or [])
        self.min_chars = min_chars
        self.context_chars = context_chars
        self.language = language
        self.direction = direction
        self.params = GenerationParams(
            temperature=Decoding.CREATIVE_TEMPERATURE,
            max_output_tokens=Decoding.SUBPAGE_MAX_TOKENS,
        )

    async def discover_and_materialize(
        self,
        project_id: str,
        idea: str,
        owner_id: str | None,
        html: str,
        css: str,
        js: str,
    ) -> int:
        """Create subpage rows for the routes linked from ``html``.

        Returns:
            Number of inserted subpage rows
        """
        routes = discover_links(html)
        logger.info("subpage_links_discovered", count=len(routes), routes=routes)

        if not routes and self.fallback_routes:
            routes = list(self.fallback_routes)
            logger.info("subpage_fallback_routes_used", routes=routes)

        if not routes:
            await self._log(project_id, "No links were found to create subpages")
            return 0

        existing = await self.store.list_subpage_routes(project_id)
        new_routes = [route for route in routes if route not in existing]
        if not new_routes:
            logger.info("subpages_already_exist", count=len(routes))
            await self._log(project_id, "All subpages already exist")
            return 0

        logger.info(
            "subpages_planned",
            discovered=len(routes),
            existing=len(routes) - len(new_routes),
            new=len(new_routes),
        )
        await self._log(project_id, f"Creating {len(new_routes)} subpages with generated content...")

        rows = []
        for route in new_routes:
            page_html = await self.generate_page(route, idea, html)
            rows.append(
                {
                    "owner_id": owner_id,
                    "parent_project_id": project_id,
                    "is_subpage": True,
                    "subpage_route": route,
                    "project_name": f"{idea} - {page_name_from_route(route)}",
                    "html_code": page_html,
                    "css_code": css,
                    "js_code": js,
                    "is_published": True,
                    "show_in_community": False,
                }
            )

        try:
            inserted = await self.store.insert_many(rows)
        except Exception as e:
            logger.error(
                "subpage_insert_failed",
                count=len(rows),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            await self._log(project_id, f"Failed to create subpages: {e}")
            return 0

        logger.info("subpages_created", count=len(inserted))
        await self._log(project_id, f"Created {len(inserted)} subpages with generated content")
        return len(inserted)

    async def generate_page(self, route: str, idea: str, parent_html: str) -> str:
        """Full HTML for one route, or the canned page if generation falls short."""
        prompt = build_subpage_prompt(
            route,
            idea,
            parent_html,
            context_chars=self.context_chars,
            language=self.language,
            language_name=LANGUAGE_NAMES.get(self.language, self.language),
            direction=self.direction,
        )
        system_prompt = SUBPAGE_SYSTEM_PROMPT.format(
            language_name=LANGUAGE_NAMES.get(self.language, self.language)
        )

        try:
            text = await self.provider.complete(prompt, self.params, system_prompt=system_prompt)
        except GenerationError as e:
            logger.warning(
                "subpage_generation_failed",
                route=route,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._fallback(route, idea)

        page = strip_code_fences(text).strip()
        if not self.passes_quality_gate(page):
            logger.warning("subpage_low_quality", route=route, length=len(page))
            return self._fallback(route, idea)

        logger.info("subpage_generated", route=route, length=len(page))
        return page

    def passes_quality_gate(self, page: str) -> bool:
        return len(page) >= self.min_chars and any(marker in page for marker in ROOT_MARKERS)

    def _fallback(self, route: str, idea: str) -> str:
        return fallback_page(route, idea, language=self.language, direction=self.direction)

    async def _log(self, project_id: str, message: str) -> None:
        await self.store.append_message(project_id, AGENT_NAME, message)
