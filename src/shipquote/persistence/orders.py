"""Persist a chosen shipping option onto an order record."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..schemas.shipping import ShippingOptionModel

logger = logging.getLogger(__name__)


class PersistenceUnavailableError(RuntimeError):
    """The order store is not configured."""


class OrderNotFoundError(LookupError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order '{order_id}' not found.")
        self.order_id = order_id


def build_shipping_block(option: ShippingOptionModel, selected_at: datetime | None = None) -> dict[str, Any]:
    """Serialize a shipping option the way it is stored inside ``shipping_address``."""
    moment = selected_at or datetime.now(timezone.utc)
    return {
        "modality_id": option.id,
        "modality": option.name,
        "price": option.price,
        "lead_time": option.delivery_time,
        "carrier": option.carrier,
        "selected_at": moment.isoformat(),
    }


def save_shipping_selection(order_id: str, option: ShippingOptionModel) -> dict[str, Any]:
    """Merge the chosen option into the order's ``shipping_address`` JSON.

    Raises:
        PersistenceUnavailableError: Supabase is not configured.
        OrderNotFoundError: no order matches ``order_id``.
    """
    supabase = get_supabase_client()
    if not supabase:
        raise PersistenceUnavailableError("Order store is not configured (missing Supabase URL or key).")

    table = settings.orders_table
    response = supabase.table(table).select("id, shipping_address").eq("id", order_id).limit(1).execute()
    if not response.data:
        raise OrderNotFoundError(order_id)

    shipping_address = response.data[0].get("shipping_address") or {}
    if not isinstance(shipping_address, dict):
        logger.warning(f"Order {order_id} has a non-object shipping_address; replacing it")
        shipping_address = {}

    block = build_shipping_block(option)
    shipping_address["shipping"] = block
    supabase.table(table).update({"shipping_address": shipping_address}).eq("id", order_id).execute()

    logger.info(f"Saved shipping option {option.id} ({option.price:.2f}) on order {order_id}")
    return {"order_id": order_id, **block}
