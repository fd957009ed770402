"""Postal code resolution services."""

from .errors import (
    AddressLookupError,
    InvalidPostalCodeError,
    PostalCodeError,
    PostalCodeNotFoundError,
)
from .resolver import (
    PostalResolver,
    clean_postal_code,
    format_postal_code,
    is_delivery_available,
    is_valid_postal_code,
    lookup_address,
)

__all__ = [
    "PostalResolver",
    "lookup_address",
    "clean_postal_code",
    "format_postal_code",
    "is_valid_postal_code",
    "is_delivery_available",
    "PostalCodeError",
    "InvalidPostalCodeError",
    "PostalCodeNotFoundError",
    "AddressLookupError",
]
