"""Shipping quote orchestration service."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol, Sequence

import httpx

from ...config import Settings, settings
from ...models.domain import CartLineItem, PostalAddress, QuoteResult, ShippingOption
from ...schemas.shipping import (
    ShippingCalculationRequest,
    ShippingCalculationResponse,
    ShippingDestination,
    ShippingOptionModel,
)
from ..geospatial import haversine_distance_km
from ..postal import AddressLookupError, PostalCodeError, PostalResolver
from .rates import (
    fallback_price_for,
    get_fallback_tier,
    iter_tiers,
    lead_time_label,
    price_for,
)
from .weights import DEFAULT_ITEM_WEIGHT_GRAMS, total_weight_grams

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Cálculo automático indisponível, valores estimados"


class AddressResolver(Protocol):
    def resolve(self, postal_code: str) -> PostalAddress: ...


class ResolutionFailed(Exception):
    """Internal signal that a quote must use fallback estimates."""


@dataclass(frozen=True, slots=True)
class QuoteConfig:
    origin_postal_code: str = "01310-100"
    default_item_weight_grams: float = DEFAULT_ITEM_WEIGHT_GRAMS
    resolve_concurrently: bool = True

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "QuoteConfig":
        source = source or settings
        return cls(
            origin_postal_code=source.origin_postal_code,
            default_item_weight_grams=source.default_item_weight_grams,
            resolve_concurrently=source.resolve_concurrently,
        )


def _sort_by_price(options: list[ShippingOption]) -> list[ShippingOption]:
    return sorted(options, key=lambda option: option.price)


class QuoteEngine:
    """Builds shipping options for a cart.

    :meth:`calculate_shipping` always returns a :class:`QuoteResult` with one
    option per carrier tier. Resolution or network failures switch the result
    to distance-independent estimates flagged with ``success=False``.
    """

    def __init__(self, resolver: AddressResolver, config: QuoteConfig | None = None) -> None:
        self.resolver = resolver
        self.config = config or QuoteConfig()

    def calculate_shipping(
        self,
        origin_postal_code: str | None,
        destination: ShippingDestination | str,
        items: Sequence[CartLineItem],
    ) -> QuoteResult:
        origin = origin_postal_code or self.config.origin_postal_code
        destination_postal_code = destination if isinstance(destination, str) else destination.postal_code
        total_weight_kg = total_weight_grams(items, self.config.default_item_weight_grams) / 1000

        try:
            origin_address, destination_address = self._resolve_pair(origin, destination_postal_code)
        except ResolutionFailed as e:
            logger.warning(f"Shipping quote {origin} -> {destination_postal_code} using fallback: {e}")
            return self._fallback_result(total_weight_kg)

        distance_km = haversine_distance_km(origin_address.coordinates, destination_address.coordinates)

        try:
            options = self._priced_options(distance_km, total_weight_kg)
        except (ArithmeticError, ValueError) as e:
            logger.warning(
                f"Shipping quote {origin} -> {destination_postal_code} could not be priced "
                f"({distance_km} km, {total_weight_kg} kg), using fallback: {e!r}"
            )
            return self._fallback_result(total_weight_kg)

        logger.info(
            f"Shipping quote {origin_address.postal_code} -> {destination_address.postal_code}: "
            f"{distance_km:.1f} km, {total_weight_kg:.3f} kg, {len(options)} options"
        )
        return QuoteResult(
            success=True,
            options=_sort_by_price(options),
            distance_km=round(distance_km, 2),
            total_weight_kg=total_weight_kg,
        )

    def _priced_options(self, distance_km: float, total_weight_kg: float) -> list[ShippingOption]:
        options: list[ShippingOption] = []
        for tier in iter_tiers():
            quote = price_for(tier.id, distance_km, total_weight_kg)
            options.append(
                ShippingOption(
                    id=tier.id,
                    name=tier.display_name,
                    carrier=tier.carrier_label,
                    price=quote.price,
                    lead_time_label=lead_time_label(quote.lead_days),
                    description=tier.description,
                )
            )
        return options

    def _resolve_pair(self, origin: str, destination: str) -> tuple[PostalAddress, PostalAddress]:
        if self.config.resolve_concurrently:
            with ThreadPoolExecutor(max_workers=2) as executor:
                origin_future = executor.submit(self._resolve, origin, "origin")
                destination_future = executor.submit(self._resolve, destination, "destination")
                return origin_future.result(), destination_future.result()
        return self._resolve(origin, "origin"), self._resolve(destination, "destination")

    def _resolve(self, postal_code: str, role: str) -> PostalAddress:
        try:
            address = self.resolver.resolve(postal_code)
        except (PostalCodeError, AddressLookupError, httpx.HTTPError, ValueError) as e:
            raise ResolutionFailed(f"could not resolve {role} postal code {postal_code}: {e}") from e
        except Exception as e:
            logger.exception(f"Unexpected error resolving {role} postal code {postal_code}")
            raise ResolutionFailed(f"unexpected error resolving {role} postal code {postal_code}: {e}") from e

        if address.coordinates is None:
            raise ResolutionFailed(f"no coordinates for {role} postal code {address.postal_code}")
        return address

    def _fallback_result(self, total_weight_kg: float) -> QuoteResult:
        try:
            options = self._fallback_options(total_weight_kg)
        except (ArithmeticError, ValueError) as e:
            # Weight unusable for the step multiplier; quote the flat single-step prices.
            logger.warning(f"Fallback estimate ignoring unusable cart weight {total_weight_kg} kg: {e!r}")
            options = self._fallback_options(0.0)
        return QuoteResult(
            success=False,
            options=_sort_by_price(options),
            error=FALLBACK_ERROR_MESSAGE,
            total_weight_kg=total_weight_kg,
        )

    def _fallback_options(self, total_weight_kg: float) -> list[ShippingOption]:
        options: list[ShippingOption] = []
        for tier in iter_tiers():
            fallback = get_fallback_tier(tier.id)
            options.append(
                ShippingOption(
                    id=tier.id,
                    name=tier.display_name,
                    carrier=tier.carrier_label,
                    price=fallback_price_for(tier.id, total_weight_kg),
                    lead_time_label=fallback.lead_time_label,
                    description=fallback.description,
                )
            )
        return options


def _option_to_model(option: ShippingOption) -> ShippingOptionModel:
    return ShippingOptionModel(
        id=option.id.value,
        name=option.name,
        carrier=option.carrier,
        price=option.price,
        delivery_time=option.lead_time_label,
        description=option.description,
    )


def quote_result_to_response(result: QuoteResult) -> ShippingCalculationResponse:
    return ShippingCalculationResponse(
        success=result.success,
        options=[_option_to_model(option) for option in result.options],
        error=result.error,
        distance_km=result.distance_km,
        total_weight_kg=round(result.total_weight_kg, 3),
    )


def calculate_shipping(
    payload: ShippingCalculationRequest,
    resolver: AddressResolver | None = None,
) -> ShippingCalculationResponse:
    """Quote every carrier tier for the request using configured services."""

    config = QuoteConfig.from_settings()
    items = [CartLineItem(weight_grams=item.weight, quantity=item.quantity) for item in payload.items]

    if resolver is not None:
        result = QuoteEngine(resolver, config).calculate_shipping(payload.origin, payload.destination, items)
        return quote_result_to_response(result)

    with PostalResolver.from_settings() as owned_resolver:
        result = QuoteEngine(owned_resolver, config).calculate_shipping(
            payload.origin, payload.destination, items
        )
    return quote_result_to_response(result)
