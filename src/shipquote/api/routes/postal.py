"""Postal code lookup endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...models.domain import PostalAddress
from ...schemas.shipping import CoordinatesModel, PostalAddressModel
from ...services.postal import (
    AddressLookupError,
    InvalidPostalCodeError,
    PostalCodeNotFoundError,
    format_postal_code,
    lookup_address,
)

router = APIRouter(prefix="/postal-codes", tags=["postal"])


def _to_model(address: PostalAddress) -> PostalAddressModel:
    coordinates = None
    if address.coordinates is not None:
        coordinates = CoordinatesModel(lat=address.coordinates.lat, lng=address.coordinates.lng)
    return PostalAddressModel(
        postal_code=format_postal_code(address.postal_code),
        street=address.street,
        neighborhood=address.neighborhood,
        city=address.city,
        state=address.state_code,
        coordinates=coordinates,
        coordinates_source=address.coordinates_source,
    )


@router.get("/{postal_code}", response_model=PostalAddressModel, status_code=status.HTTP_200_OK)
def get_postal_address(postal_code: str) -> PostalAddressModel:
    try:
        return _to_model(lookup_address(postal_code))
    except InvalidPostalCodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PostalCodeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except AddressLookupError as exc:
        logging.warning(f"Address lookup failed for {postal_code}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Address lookup service unavailable",
        ) from exc
