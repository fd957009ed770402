"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_address_lookup_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.postal.client import check_health
    return check_health


@router.get("/health/postal", status_code=status.HTTP_200_OK)
def health_postal() -> dict:
    """Check the public address lookup service."""
    try:
        check_health = _get_address_lookup_health_check()
        return {"service": "address_lookup", "healthy": check_health()}
    except Exception as e:
        return {"service": "address_lookup", "healthy": False, "error": str(e)}
