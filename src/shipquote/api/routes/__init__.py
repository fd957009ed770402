"""Route group exports."""

from . import health, orders, postal, shipping

__all__ = ["health", "postal", "shipping", "orders"]
