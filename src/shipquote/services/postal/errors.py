"""Postal code resolution errors."""


class PostalCodeError(ValueError):
    """Base class for postal code problems raised by the resolver."""

    def __init__(self, postal_code: str, message: str) -> None:
        super().__init__(message)
        self.postal_code = postal_code


class InvalidPostalCodeError(PostalCodeError):
    """Postal code does not contain exactly 8 digits."""

    def __init__(self, postal_code: str) -> None:
        super().__init__(postal_code, f"Postal code '{postal_code}' must contain exactly 8 digits.")


class PostalCodeNotFoundError(PostalCodeError):
    """The address lookup service does not know the postal code."""

    def __init__(self, postal_code: str) -> None:
        super().__init__(postal_code, f"Postal code '{postal_code}' was not found.")


class AddressLookupError(ConnectionError):
    """The address lookup service could not be reached or answered with an error."""
