"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from serviceflow.api.v1 import catalog, flow, health

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Guided flow
api_router.include_router(flow.router)

# Catalog browsing
api_router.include_router(
    catalog.router,
    tags=["catalog"],
)
