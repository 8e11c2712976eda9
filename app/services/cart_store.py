"""
Session-keyed cart persistence.

Carts are stored as a tagged JSON document::

    {"version": 2, "items": {"<product_id>": {"product": {...}, "quantity": 2, "price": "4.99"}}}

Older sessions may still hold one of two legacy shapes, recognised on read
and upgraded before the cart reaches any caller:

* the counter shape (``cart_count`` / ``cart_items`` keys) is discarded and
  replaced with an empty cart;
* the untagged shape (a bare ``product_id -> entry`` mapping) is wrapped into
  the current version with its entries kept.

The upgraded payload is written back straight away so the migration happens
once per session.
"""
import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from app.models.cart import Cart, CartSession, CART_PAYLOAD_VERSION

logger = logging.getLogger(__name__)

LEGACY_COUNTER_KEYS = {"cart_count", "cart_items"}


def parse_cart_payload(payload: Any) -> Tuple[Cart, bool]:
    """Return ``(cart, upgraded)``; ``upgraded`` means the payload must be rewritten."""
    if not payload:
        return Cart(), False

    if not isinstance(payload, dict):
        logger.warning("Discarding unreadable cart payload", extra={"payload_type": type(payload).__name__})
        return Cart(), True

    if LEGACY_COUNTER_KEYS <= payload.keys():
        logger.info("Converting old cart structure to new structure")
        return Cart(), True

    if payload.get("version") == CART_PAYLOAD_VERSION:
        return Cart.model_validate({"items": payload.get("items") or {}}), False

    try:
        cart = Cart.model_validate({"items": payload})
    except PydanticValidationError as e:
        logger.warning("Discarding malformed untagged cart", extra={"errors": e.errors(include_url=False)})
        return Cart(), True

    logger.info("Upgraded untagged cart", extra={"items_count": len(cart.items)})
    return cart, True


def dump_cart_payload(cart: Cart) -> Dict[str, Any]:
    items = cart.model_dump(mode="json", include={"items"})["items"]
    return {"version": CART_PAYLOAD_VERSION, "items": items}


class CartStore(ABC):
    """Loads and saves carts by session id."""

    def load(self, session_id: str) -> Cart:
        cart, upgraded = parse_cart_payload(self._read(session_id))
        if upgraded:
            self.save(session_id, cart)
        return cart

    @abstractmethod
    def _read(self, session_id: str) -> Any:
        ...

    @abstractmethod
    def save(self, session_id: str, cart: Cart) -> None:
        ...

    @abstractmethod
    def clear(self, session_id: str) -> None:
        ...


class MemoryCartStore(CartStore):
    """
    In-process carts for a single worker.

    Holds at most ``max_sessions`` carts; saving past the limit evicts the
    least recently used session.
    """

    def __init__(self, max_sessions: int = 10000):
        self.max_sessions = max_sessions
        self._payloads: "OrderedDict[str, Any]" = OrderedDict()

    def _read(self, session_id: str) -> Any:
        payload = self._payloads.get(session_id)
        if payload is not None:
            self._payloads.move_to_end(session_id)
        return payload

    def save(self, session_id: str, cart: Cart) -> None:
        self._payloads[session_id] = dump_cart_payload(cart)
        self._payloads.move_to_end(session_id)
        while len(self._payloads) > self.max_sessions:
            evicted, _ = self._payloads.popitem(last=False)
            logger.info("Evicted cart session", extra={"session_id": evicted})

    def clear(self, session_id: str) -> None:
        self._payloads.pop(session_id, None)


class DatabaseCartStore(CartStore):
    def __init__(self, session: Session):
        self.session = session

    def _read(self, session_id: str) -> Any:
        row = self.session.get(CartSession, session_id)
        return row.payload if row else None

    def save(self, session_id: str, cart: Cart) -> None:
        row = self.session.get(CartSession, session_id)
        if row is None:
            row = CartSession(session_id=session_id)
        row.payload = dump_cart_payload(cart)
        row.updated_at = datetime.now(timezone.utc)
        self.session.add(row)
        self.session.commit()

    def clear(self, session_id: str) -> None:
        row = self.session.get(CartSession, session_id)
        if row is not None:
            self.session.delete(row)
            self.session.commit()
