"""Client-held cart for a single food truck.

The cart is a plain value object. It is never stored server-side: the
``CartStore`` serialises it into the signed Flask session cookie under a
per-role key, so the browser holds it between requests.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from flask import session
from pydantic import BaseModel, Field, ValidationError

from app.services.errors import DifferentRestaurantConflict
from app.services.wallet_ops import to_money

logger = logging.getLogger(__name__)

CART_SCHEMA_VERSION = 1
CUSTOMER_CART_KEY = "food-truck-cart"
STAFF_CART_KEY = "staff-cart"


class CartLine(BaseModel):
    item_id: int
    name: str
    price: Decimal = Field(ge=0)
    food_truck_id: int
    quantity: int = Field(ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self):
        return {
            "item_id": self.item_id,
            "name": self.name,
            "price": float(to_money(self.price)),
            "food_truck_id": self.food_truck_id,
            "quantity": self.quantity,
            "subtotal": float(to_money(self.subtotal)),
        }


class Cart:
    def __init__(self, lines: Optional[List[CartLine]] = None):
        self.lines: List[CartLine] = list(lines or [])

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def food_truck_id(self) -> Optional[int]:
        return self.lines[0].food_truck_id if self.lines else None

    def get(self, item_id: int) -> Optional[CartLine]:
        return next((line for line in self.lines if line.item_id == item_id), None)

    def add(self, item, quantity: int = 1) -> CartLine:
        """Add ``quantity`` of ``item``; raises DifferentRestaurantConflict without touching the cart."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if self.lines and any(line.food_truck_id != item.food_truck_id for line in self.lines):
            raise DifferentRestaurantConflict(current_food_truck_id=self.food_truck_id)

        existing = self.get(item.id)
        if existing:
            existing.quantity += quantity
            return existing

        line = CartLine(
            item_id=item.id,
            name=item.name,
            price=to_money(item.price),
            food_truck_id=item.food_truck_id,
            quantity=quantity,
        )
        self.lines.append(line)
        return line

    def remove(self, item_id: int) -> bool:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.item_id != item_id]
        return len(self.lines) != before

    def set_quantity(self, item_id: int, quantity: int) -> bool:
        """Returns False when the item is not in the cart. A quantity below 1 removes the line."""
        line = self.get(item_id)
        if not line:
            return False
        if quantity < 1:
            self.remove(item_id)
        else:
            line.quantity = quantity
        return True

    def clear(self) -> None:
        self.lines = []

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    def as_order_lines(self):
        return [{"item_id": line.item_id, "quantity": line.quantity} for line in self.lines]

    def to_dict(self):
        return {
            "schema_version": CART_SCHEMA_VERSION,
            "lines": [line.model_dump(mode="json") for line in self.lines],
        }

    @classmethod
    def from_dict(cls, data) -> "Cart":
        if not isinstance(data, dict) or data.get("schema_version") != CART_SCHEMA_VERSION:
            return cls()
        try:
            return cls([CartLine(**raw) for raw in data.get("lines", [])])
        except (TypeError, ValidationError):
            logger.warning("Discarding unreadable cart payload")
            return cls()


class CartStore:
    """Loads and saves a cart in the client session under a role-specific key."""

    def __init__(self, key: str = CUSTOMER_CART_KEY):
        self.key = key

    def load(self) -> Cart:
        return Cart.from_dict(session.get(self.key))

    def save(self, cart: Cart) -> None:
        session[self.key] = cart.to_dict()
        session.modified = True

    def clear(self) -> None:
        session.pop(self.key, None)
