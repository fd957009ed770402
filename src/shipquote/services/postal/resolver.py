"""Postal code resolution with multi-tier coordinate fallback."""

from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from ...config import settings
from ...models.domain import Coordinates, PostalAddress
from .capitals import capital_coordinates
from .client import AddressLookupClient, GeocodingClient, build_http_client
from .errors import InvalidPostalCodeError, PostalCodeNotFoundError

logger = logging.getLogger(__name__)

POSTAL_CODE_LENGTH = 8
# Lowest and highest CEPs in use across Brazil (01000-000 to 99999-999).
MIN_SERVICEABLE_POSTAL_CODE = 1_000_000
MAX_SERVICEABLE_POSTAL_CODE = 99_999_999

COORDINATES_FROM_GEOCODING = "geocoding"
COORDINATES_FROM_STATE_CAPITAL = "state_capital"

_NON_DIGITS = re.compile(r"[^0-9]")


def clean_postal_code(postal_code: str) -> str:
    return _NON_DIGITS.sub("", postal_code or "")


def is_valid_postal_code(postal_code: str) -> bool:
    return len(clean_postal_code(postal_code)) == POSTAL_CODE_LENGTH


def format_postal_code(postal_code: str) -> str:
    """Format as ``NNNNN-NNN``; codes that are not 8 digits come back cleaned but unformatted."""
    cleaned = clean_postal_code(postal_code)
    if len(cleaned) != POSTAL_CODE_LENGTH:
        return cleaned
    return f"{cleaned[:5]}-{cleaned[5:]}"


def is_delivery_available(postal_code: str) -> bool:
    """Return True if the postal code falls inside the national CEP range."""
    cleaned = clean_postal_code(postal_code)
    if not cleaned:
        return False
    number = int(cleaned)
    return MIN_SERVICEABLE_POSTAL_CODE <= number <= MAX_SERVICEABLE_POSTAL_CODE


def _is_not_found(payload: dict) -> bool:
    flag = payload.get("erro")
    if isinstance(flag, str):
        return flag.strip().lower() == "true"
    return bool(flag)


class PostalResolver:
    """Turns a postal code into a normalized address with coordinates.

    Coordinates come from the geocoding service when it answers, otherwise
    from the state capital table. Each resolution makes at most two outbound
    calls; nothing is retried or cached.
    """

    def __init__(
        self,
        address_client: AddressLookupClient,
        geocoding_client: GeocodingClient,
        *,
        owned_http_client: httpx.Client | None = None,
    ) -> None:
        self.address_client = address_client
        self.geocoding_client = geocoding_client
        self._owned_http_client = owned_http_client

    @classmethod
    def from_settings(cls, http_client: httpx.Client | None = None) -> "PostalResolver":
        """Build a resolver against the configured services.

        When ``http_client`` is omitted the resolver creates and owns one,
        released by :meth:`close`.
        """
        owned = None
        if http_client is None:
            http_client = owned = build_http_client()
        return cls(
            AddressLookupClient(http_client),
            GeocodingClient(http_client),
            owned_http_client=owned,
        )

    def close(self) -> None:
        if self._owned_http_client is not None:
            self._owned_http_client.close()
            self._owned_http_client = None

    def __enter__(self) -> "PostalResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def resolve(self, postal_code: str) -> PostalAddress:
        """Resolve a postal code to an address.

        Raises:
            InvalidPostalCodeError: the code does not have exactly 8 digits.
            PostalCodeNotFoundError: the lookup service reports the code as unknown.
            AddressLookupError: the lookup service failed.
        """
        cleaned = clean_postal_code(postal_code)
        if len(cleaned) != POSTAL_CODE_LENGTH:
            raise InvalidPostalCodeError(postal_code)

        payload = self.address_client.fetch(cleaned)
        if _is_not_found(payload):
            raise PostalCodeNotFoundError(cleaned)

        address = PostalAddress(
            postal_code=cleaned,
            street=str(payload.get("logradouro") or ""),
            neighborhood=str(payload.get("bairro") or ""),
            city=str(payload.get("localidade") or ""),
            state_code=str(payload.get("uf") or "").upper(),
        )
        self._attach_coordinates(address)
        return address

    def _attach_coordinates(self, address: PostalAddress) -> None:
        coordinates = self._geocode(address)
        if coordinates is not None:
            address.coordinates = coordinates
            address.coordinates_source = COORDINATES_FROM_GEOCODING
            return

        coordinates = capital_coordinates(address.state_code)
        if coordinates is not None:
            logger.info(
                f"Using state capital coordinates for postal code {address.postal_code} ({address.state_code})"
            )
            address.coordinates = coordinates
            address.coordinates_source = COORDINATES_FROM_STATE_CAPITAL
            return

        logger.warning(
            f"No coordinates available for postal code {address.postal_code} "
            f"(state '{address.state_code}' not in capital table)"
        )

    def _geocode(self, address: PostalAddress) -> Optional[Coordinates]:
        query = f"{address.postal_code}, {address.city}, {address.state_code}, Brazil"
        try:
            coordinates = self.geocoding_client.search(query)
        except (httpx.HTTPError, TypeError, ValueError) as e:
            logger.warning(f"Geocoding failed for postal code {address.postal_code}: {e}")
            return None
        if coordinates is None:
            logger.warning(f"Geocoding returned no results for postal code {address.postal_code}")
        return coordinates


def lookup_address(postal_code: str) -> PostalAddress:
    """Resolve a postal code using a short-lived resolver built from settings."""
    with PostalResolver.from_settings() as resolver:
        return resolver.resolve(postal_code)
