from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from models.order import OrderType, PaymentMethod, OrderStatus
from app.services.settlement import CARD_METHODS, CardDetails


class CartAddRequest(BaseModel):
    item_id: int
    quantity: int = Field(default=1, ge=1)


class CartUpdateRequest(BaseModel):
    item_id: int
    quantity: int


class CartRemoveRequest(BaseModel):
    item_id: int


class OrderLine(BaseModel):
    item_id: int
    quantity: int = Field(ge=1)


class PlaceOrderRequest(BaseModel):
    """Order placement body. ``items`` overrides the session cart when given."""
    items: Optional[List[OrderLine]] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    order_type: OrderType = OrderType.PICKUP
    payment_method: PaymentMethod
    pickup_datetime: Optional[datetime] = None
    card: Optional[CardDetails] = None

    @model_validator(mode="after")
    def _card_only_for_cards(self):
        if self.card is not None and self.payment_method not in CARD_METHODS:
            raise ValueError("Card details are only accepted for card payments")
        return self


class StatusUpdateRequest(BaseModel):
    status: OrderStatus


class FeedbackRequest(BaseModel):
    feedback: str = Field(min_length=1, max_length=1000)


class DepositRequest(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
