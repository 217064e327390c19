"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from custom_domains.infrastructure.firebase import get_firestore_client
from custom_domains.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok plus whether the domain store is initialized."""
    return HealthResponse(store_configured=get_firestore_client() is not None)
