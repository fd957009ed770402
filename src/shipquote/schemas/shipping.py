"""Shipping quote request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ShippingDestination(BaseModel):
    postal_code: str = Field(..., description="Destination CEP, with or without the hyphen.")
    address: str = ""
    number: str = ""
    complement: Optional[str] = None
    neighborhood: str = ""
    city: str = ""
    state: str = ""


# Per line item: 100 kg unit weight, 1000 units.
MAX_ITEM_WEIGHT_GRAMS = 100_000
MAX_ITEM_QUANTITY = 1_000


class ShippingItem(BaseModel):
    weight: Optional[float] = Field(
        default=None, ge=0, le=MAX_ITEM_WEIGHT_GRAMS, allow_inf_nan=False, description="Unit weight in grams."
    )
    quantity: int = Field(default=1, ge=1, le=MAX_ITEM_QUANTITY)


class ShippingCalculationRequest(BaseModel):
    origin: Optional[str] = Field(
        default=None,
        description="Origin CEP. Defaults to the configured store origin.",
    )
    destination: ShippingDestination
    items: List[ShippingItem] = Field(..., min_length=1)


class ShippingOptionModel(BaseModel):
    id: str
    name: str
    carrier: str
    price: float = Field(..., ge=0)
    delivery_time: str
    description: str


class ShippingCalculationResponse(BaseModel):
    success: bool
    options: List[ShippingOptionModel]
    error: Optional[str] = None
    distance_km: Optional[float] = None
    total_weight_kg: float = 0.0


class CoordinatesModel(BaseModel):
    lat: float
    lng: float


class PostalAddressModel(BaseModel):
    postal_code: str
    street: str
    neighborhood: str
    city: str
    state: str
    coordinates: Optional[CoordinatesModel] = None
    coordinates_source: Optional[str] = None


class DeliveryAvailabilityResponse(BaseModel):
    postal_code: str
    available: bool


class ShippingSelectionRequest(BaseModel):
    option: ShippingOptionModel


class ShippingSelectionResponse(BaseModel):
    order_id: str
    modality_id: str
    modality: str
    price: float
    lead_time: str
    carrier: str
    selected_at: str
