"""Prompt templates."""

from .continuation import CONTINUATION_SYSTEM_PROMPT, build_continuation_prompt
from .registry import BuildContext, PromptRegistry, default_registry
from .subpages import (
    SUBPAGE_SYSTEM_PROMPT,
    PageKind,
    PageTemplate,
    build_subpage_prompt,
    classify_route,
    fallback_page,
    page_name_from_route,
)

__all__ = [
    "BuildContext",
    "CONTINUATION_SYSTEM_PROMPT",
    "PageKind",
    "PageTemplate",
    "PromptRegistry",
    "SUBPAGE_SYSTEM_PROMPT",
    "build_continuation_prompt",
    "build_subpage_prompt",
    "classify_route",
    "default_registry",
    "fallback_page",
    "page_name_from_route",
]
