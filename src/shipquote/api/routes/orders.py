"""Order shipping selection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...persistence.orders import (
    OrderNotFoundError,
    PersistenceUnavailableError,
    save_shipping_selection,
)
from ...schemas.shipping import ShippingSelectionRequest, ShippingSelectionResponse

router = APIRouter(prefix="/orders", tags=["orders"])


@router.put(
    "/{order_id}/shipping",
    response_model=ShippingSelectionResponse,
    status_code=status.HTTP_200_OK,
)
def select_shipping(order_id: str, payload: ShippingSelectionRequest) -> ShippingSelectionResponse:
    """Store the shipping option the customer picked on the order."""
    try:
        record = save_shipping_selection(order_id, payload.option)
        return ShippingSelectionResponse(**record)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PersistenceUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        import logging
        logging.exception(f"Error saving shipping option for order {order_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save shipping option: {str(exc)}"
        ) from exc
