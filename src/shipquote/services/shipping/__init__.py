"""Shipping rate estimation services."""

from .rates import (
    CARRIER_TIERS,
    FALLBACK_TIERS,
    fallback_price_for,
    get_tier,
    iter_tiers,
    lead_time_label,
    price_for,
)
from .service import (
    FALLBACK_ERROR_MESSAGE,
    QuoteConfig,
    QuoteEngine,
    calculate_shipping,
    quote_result_to_response,
)
from .weights import DEFAULT_ITEM_WEIGHT_GRAMS, total_weight_grams, weight_with_fallback

__all__ = [
    "CARRIER_TIERS",
    "FALLBACK_TIERS",
    "get_tier",
    "iter_tiers",
    "price_for",
    "fallback_price_for",
    "lead_time_label",
    "QuoteConfig",
    "QuoteEngine",
    "calculate_shipping",
    "quote_result_to_response",
    "FALLBACK_ERROR_MESSAGE",
    "DEFAULT_ITEM_WEIGHT_GRAMS",
    "total_weight_grams",
    "weight_with_fallback",
]
