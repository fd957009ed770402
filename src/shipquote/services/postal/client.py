"""HTTP clients for the public CEP lookup and geocoding services."""

from __future__ import annotations

import logging
import math
from typing import Optional

import httpx

from ...config import settings
from ...models.domain import Coordinates
from .errors import AddressLookupError

logger = logging.getLogger(__name__)


def build_http_client(timeout: float | None = None, user_agent: str | None = None) -> httpx.Client:
    """Create an HTTP client whose every request is bounded by ``timeout`` seconds."""
    return httpx.Client(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.http_timeout_seconds),
        headers={"User-Agent": user_agent or settings.geocoding_user_agent},
        follow_redirects=True,
    )


class AddressLookupClient:
    """Client for the public CEP address lookup (ViaCEP-compatible JSON API)."""

    def __init__(self, http_client: httpx.Client, base_url: str | None = None) -> None:
        self.base_url = (base_url or settings.address_lookup_base_url).rstrip("/")
        self._client = http_client

    def fetch(self, postal_code: str) -> dict:
        """Return the raw JSON record for an already-cleaned 8-digit postal code.

        Raises:
            AddressLookupError: on network failure, timeout, a non-2xx status,
                or a body that is not a JSON object.
        """
        url = f"{self.base_url}/{postal_code}/json/"
        logger.debug(f"Address lookup request: {url}")
        try:
            response = self._client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise AddressLookupError(f"Address lookup timed out for postal code {postal_code}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise AddressLookupError(
                f"Address lookup returned HTTP {e.response.status_code} for postal code {postal_code}"
            ) from e
        except httpx.HTTPError as e:
            raise AddressLookupError(f"Failed to reach address lookup service at {self.base_url}: {e}") from e
        except ValueError as e:
            raise AddressLookupError(f"Address lookup returned invalid JSON for postal code {postal_code}") from e

        if not isinstance(data, dict):
            raise AddressLookupError(f"Unexpected address lookup payload for postal code {postal_code}")
        return data


class GeocodingClient:
    """Client for a Nominatim-style free-text geocoding search."""

    def __init__(
        self,
        http_client: httpx.Client,
        base_url: str | None = None,
        country_code: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoding_base_url).rstrip("/")
        self.country_code = country_code or settings.geocoding_country_code
        self._client = http_client

    def search(self, query: str) -> Optional[Coordinates]:
        """Return the first result's coordinates, or None when nothing matched.

        Transport and HTTP errors propagate as ``httpx.HTTPError``; malformed
        payloads raise ``ValueError``.
        """
        params = {
            "q": query,
            "format": "json",
            "limit": 1,
            "countrycodes": self.country_code,
        }
        logger.debug(f"Geocoding request: {query!r}")
        response = self._client.get(self.base_url, params=params)
        response.raise_for_status()
        results = response.json()

        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        if not isinstance(first, dict) or "lat" not in first or "lon" not in first:
            return None
        try:
            lat, lng = float(first["lat"]), float(first["lon"])
        except (TypeError, ValueError):
            logger.debug(f"Geocoding returned unparsable coordinates for {query!r}: {first!r}")
            return None
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return None
        return Coordinates(lat=lat, lng=lng)


def check_health(base_url: str | None = None, postal_code: str | None = None) -> bool:
    """Check the address lookup service by resolving a known postal code."""
    base = (base_url or settings.address_lookup_base_url).rstrip("/")
    probe = "".join(ch for ch in (postal_code or settings.origin_postal_code) if ch.isdigit())
    try:
        response = httpx.get(f"{base}/{probe}/json/", timeout=settings.http_timeout_seconds)
        response.raise_for_status()
        data = response.json()
        return isinstance(data, dict) and not data.get("erro")
    except httpx.HTTPError:
        return False
    except ValueError:
        return False
