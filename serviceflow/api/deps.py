"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from serviceflow.catalog.base import Catalog
from serviceflow.core.config import settings
from serviceflow.flow.orchestrator import FlowOrchestrator


def get_catalog(request: Request) -> Catalog:
    """Return the catalog created at application startup."""
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog is not configured",
        )
    return catalog


def get_orchestrator(
    catalog: Annotated[Catalog, Depends(get_catalog)],
) -> FlowOrchestrator:
    """Build a flow orchestrator bound to the request's catalog."""
    return FlowOrchestrator(catalog, fetch_timeout=settings.catalog_fetch_timeout_seconds)


# Type aliases for cleaner endpoint signatures
CatalogDep = Annotated[Catalog, Depends(get_catalog)]
Orchestrator = Annotated[FlowOrchestrator, Depends(get_orchestrator)]
