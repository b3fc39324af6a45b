"""AI agents router: full builds and incremental edits."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import structlog

from shared.contracts import BuildRequest, ContinueRequest

from ..continuation import ContinuationService
from ..dependencies import get_continuation_service, get_orchestrator
from ..orchestrator import BuildOrchestrator

logger = structlog.get_logger()

router = APIRouter(prefix="/agents", tags=["agents"])


@router.post("/build")
async def build_project(
    request: BuildRequest,
    orchestrator: BuildOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Run the full build pipeline. 200 on success, 500 with an error body otherwise."""
    logger.info("build_requested", project_id=request.project_id)
    result = await orchestrator.run(request)
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.success else status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=result.to_wire(),
    )


@router.post("/continue")
async def continue_project(
    request: ContinueRequest,
    service: ContinuationService = Depends(get_continuation_service),
) -> JSONResponse:
    """Apply an edit request. Failures are reported in the body with an error code."""
    result = await service.apply(request)
    return JSONResponse(content=result.to_wire())
