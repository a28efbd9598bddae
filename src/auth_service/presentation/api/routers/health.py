"""Liveness and readiness checks (unversioned)."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Report that the process is alive."""
    return {"status": "ok"}


@router.get(
    "/ready",
    responses={503: {"description": "Shutdown in progress"}},
)
async def readiness_check(request: Request) -> JSONResponse:
    """Report whether the service accepts traffic.

    Flips to 503 as soon as shutdown begins, so load balancers stop routing
    new requests while in-flight ones drain.
    """
    if getattr(request.app.state, "shutting_down", False):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "shutting_down"},
        )
    return JSONResponse(content={"status": "ok"})
