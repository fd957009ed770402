"""Shipping quote endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.shipping import (
    DeliveryAvailabilityResponse,
    ShippingCalculationRequest,
    ShippingCalculationResponse,
)
from ...services.postal import format_postal_code, is_delivery_available
from ...services.shipping.service import calculate_shipping

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.post("/quote", response_model=ShippingCalculationResponse, status_code=status.HTTP_200_OK)
def quote(payload: ShippingCalculationRequest) -> ShippingCalculationResponse:
    """Quote every carrier tier; falls back to estimates instead of failing."""
    return calculate_shipping(payload)


@router.get(
    "/availability/{postal_code}",
    response_model=DeliveryAvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
def availability(postal_code: str) -> DeliveryAvailabilityResponse:
    return DeliveryAvailabilityResponse(
        postal_code=format_postal_code(postal_code),
        available=is_delivery_available(postal_code),
    )
