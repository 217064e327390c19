"""API v1 router aggregation."""

from fastapi import APIRouter

from custom_domains.api.v1.endpoints import domains, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(domains.router, prefix="/domain", tags=["domain"])
