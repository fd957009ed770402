"""Cart weight aggregation."""

from __future__ import annotations

from typing import Iterable, Optional

from ...models.domain import CartLineItem

DEFAULT_ITEM_WEIGHT_GRAMS = 200.0


def weight_with_fallback(weight_grams: Optional[float], default_weight_grams: float = DEFAULT_ITEM_WEIGHT_GRAMS) -> float:
    if weight_grams and weight_grams > 0:
        return float(weight_grams)
    return float(default_weight_grams)


def total_weight_grams(
    items: Iterable[CartLineItem],
    default_weight_grams: float = DEFAULT_ITEM_WEIGHT_GRAMS,
) -> float:
    """Sum weight x quantity over the cart, substituting the default for missing weights."""

    return sum(
        (weight_with_fallback(item.weight_grams, default_weight_grams) * item.quantity for item in items),
        0.0,
    )
