"""In-process pipeline context passed between build steps.

The persisted project row is a write-only projection of this state: steps
read prior artifacts from here, never back from storage.
"""

from typing import Annotated

from typing_extensions import TypedDict


def _merge_errors(left: list[str], right: list[str]) -> list[str]:
    """Reducer that merges error lists without duplicates."""
    seen = set(left)
    result = list(left)
    for err in right:
        if err not in seen:
            result.append(err)
            seen.add(err)
    return result


class BuildState(TypedDict):
    """State of one build run."""

    # ============================================================
    # REQUEST
    # ============================================================
    project_id: str
    owner_id: str | None
    idea: str

    # ============================================================
    # ARTIFACTS
    # ============================================================
    html: str
    css: str
    js: str

    # ============================================================
    # OUTCOME
    # ============================================================
    # False when the review step passed the pre-review artifacts through
    reviewed: bool
    published: bool
    # Non-empty means the run failed; routing ends the graph
    errors: Annotated[list[str], _merge_errors]


def initial_state(project_id: str, idea: str, owner_id: str | None = None) -> BuildState:
    return BuildState(
        project_id=project_id,
        owner_id=owner_id,
        idea=idea,
        html="",
        css="",
        js="",
        reviewed=False,
        published=False,
        errors=[],
    )
