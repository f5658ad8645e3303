"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from serviceflow.api.deps import CatalogDep
from serviceflow.core.errors import CatalogError

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is healthy."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns service readiness status for k8s probes",
)
async def readiness_check(catalog: CatalogDep) -> HealthResponse:
    """Check that the catalog is configured and answering.

    Returns:
        Readiness status response

    Raises:
        HTTPException: 503 if the catalog is missing or unreachable
    """
    try:
        await catalog.list_goals()
    except CatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=exc.message,
        ) from exc
    return HealthResponse(status="ok")
