"""Projects router: build progress for polling clients."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from shared.contracts import ProjectProgress

from ..dependencies import get_project_store
from ..stores import ProjectStore

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/{project_id}/progress")
async def get_progress(
    project_id: str,
    store: ProjectStore = Depends(get_project_store),
) -> JSONResponse:
    """Current status, progress percentage and agent message log."""
    project = await store.get(project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    progress = ProjectProgress(
        id=project["id"],
        status=project.get("ai_agents_status"),
        progress=project.get("ai_agents_progress") or 0,
        is_published=bool(project.get("is_published")),
        messages=project.get("agent_messages") or [],
        updated_at=project.get("updated_at"),
    )
    return JSONResponse(content=progress.to_wire())
