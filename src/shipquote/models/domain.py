"""Domain models for addresses, carts and shipping quotes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class Coordinates:
    """WGS84 point in decimal degrees."""

    lat: float
    lng: float


@dataclass(slots=True)
class PostalAddress:
    """Normalized address record for a cleaned 8-digit postal code."""

    postal_code: str
    street: str
    neighborhood: str
    city: str
    state_code: str
    coordinates: Optional[Coordinates] = None
    coordinates_source: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CartLineItem:
    weight_grams: Optional[float]
    quantity: int


class CarrierTierId(str, Enum):
    ECONOMY = "correios-pac"
    STANDARD = "correios-sedex"
    EXPRESS = "express"


@dataclass(frozen=True, slots=True)
class CarrierTier:
    """Pricing and lead-time model for one carrier service level."""

    id: CarrierTierId
    display_name: str
    carrier_label: str
    base_price: float
    price_per_km: float
    price_per_kg: float
    base_lead_days: int
    extra_lead_days_per_km: float
    description: str


@dataclass(frozen=True, slots=True)
class FallbackTier:
    """Distance-independent estimate used when locations cannot be resolved."""

    tier_id: CarrierTierId
    flat_base_price: float
    lead_time_label: str
    description: str


@dataclass(frozen=True, slots=True)
class RateQuote:
    price: float
    lead_days: int


@dataclass(slots=True)
class ShippingOption:
    id: CarrierTierId
    name: str
    carrier: str
    price: float
    lead_time_label: str
    description: str


@dataclass(slots=True)
class QuoteResult:
    """Outcome of a quote request; ``options`` is never empty."""

    success: bool
    options: List[ShippingOption] = field(default_factory=list)
    error: Optional[str] = None
    distance_km: Optional[float] = None
    total_weight_kg: float = 0.0
