from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from desguace_catalog.container import AppContainer
from desguace_catalog.entrypoints.http.dependencies import get_container

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness probe")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/health/backend",
    summary="Backend reachability",
    responses={503: {"description": "Backend is not reachable"}},
)
async def backend_health(container: AppContainer = Depends(get_container)) -> JSONResponse:
    if await container.check_backend():
        return JSONResponse(status_code=200, content={"backend": "ok"})
    return JSONResponse(status_code=503, content={"backend": "unavailable"})
