"""Prometheus scrape endpoint (unversioned)."""

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose the process-wide metrics registry in text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
