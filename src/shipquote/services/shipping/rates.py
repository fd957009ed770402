"""Static carrier tier pricing and lead-time model."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from ...models.domain import CarrierTier, CarrierTierId, FallbackTier, RateQuote

# Weight already covered by each tier's base price.
INCLUDED_WEIGHT_KG = 1.0

CARRIER_TIERS: dict[CarrierTierId, CarrierTier] = {
    CarrierTierId.ECONOMY: CarrierTier(
        id=CarrierTierId.ECONOMY,
        display_name="PAC - Econômico",
        carrier_label="Correios",
        base_price=8.50,
        price_per_km=0.015,
        price_per_kg=4.50,
        base_lead_days=8,
        extra_lead_days_per_km=0.002,
        description="Entrega econômica em 7-12 dias úteis",
    ),
    CarrierTierId.STANDARD: CarrierTier(
        id=CarrierTierId.STANDARD,
        display_name="SEDEX - Padrão",
        carrier_label="Correios",
        base_price=15.50,
        price_per_km=0.025,
        price_per_kg=6.50,
        base_lead_days=4,
        extra_lead_days_per_km=0.001,
        description="Entrega padrão em 2-5 dias úteis",
    ),
    CarrierTierId.EXPRESS: CarrierTier(
        id=CarrierTierId.EXPRESS,
        display_name="Expresso",
        carrier_label="Transportadora",
        base_price=25.50,
        price_per_km=0.035,
        price_per_kg=8.50,
        base_lead_days=2,
        extra_lead_days_per_km=0.0005,
        description="Entrega expressa em 1-2 dias úteis",
    ),
}

FALLBACK_TIERS: dict[CarrierTierId, FallbackTier] = {
    CarrierTierId.ECONOMY: FallbackTier(
        tier_id=CarrierTierId.ECONOMY,
        flat_base_price=12.90,
        lead_time_label="8-12 dias úteis",
        description="Entrega econômica",
    ),
    CarrierTierId.STANDARD: FallbackTier(
        tier_id=CarrierTierId.STANDARD,
        flat_base_price=19.90,
        lead_time_label="3-5 dias úteis",
        description="Entrega padrão",
    ),
    CarrierTierId.EXPRESS: FallbackTier(
        tier_id=CarrierTierId.EXPRESS,
        flat_base_price=29.90,
        lead_time_label="1-2 dias úteis",
        description="Entrega expressa",
    ),
}


def round_price(value: float) -> float:
    """Round to cents, half-up."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def get_tier(tier_id: CarrierTierId | str) -> CarrierTier:
    return CARRIER_TIERS[CarrierTierId(tier_id)]


def get_fallback_tier(tier_id: CarrierTierId | str) -> FallbackTier:
    return FALLBACK_TIERS[CarrierTierId(tier_id)]


def iter_tiers() -> Iterator[CarrierTier]:
    return iter(CARRIER_TIERS.values())


def price_for(tier_id: CarrierTierId | str, distance_km: float, total_weight_kg: float) -> RateQuote:
    """Price and lead time for shipping ``total_weight_kg`` over ``distance_km``."""

    tier = get_tier(tier_id)
    extra_weight_kg = max(0.0, total_weight_kg - INCLUDED_WEIGHT_KG)
    price = max(
        tier.base_price,
        tier.base_price + distance_km * tier.price_per_km + extra_weight_kg * tier.price_per_kg,
    )
    lead_days = math.ceil(tier.base_lead_days + distance_km * tier.extra_lead_days_per_km)
    return RateQuote(price=round_price(price), lead_days=lead_days)


def weight_multiplier(total_weight_kg: float) -> int:
    """Whole-kilogram step used by fallback estimates; never below 1."""
    return max(1, math.ceil(total_weight_kg))


def fallback_price_for(tier_id: CarrierTierId | str, total_weight_kg: float) -> float:
    """Distance-independent estimate: flat tier price times the weight step."""

    fallback = get_fallback_tier(tier_id)
    return round_price(fallback.flat_base_price * weight_multiplier(total_weight_kg))


def lead_time_label(days: int) -> str:
    if days == 1:
        return "1 dia útil"
    return f"{days} dias úteis"
