import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.metrics import ORDERS_PLACED
from app.services.availability import ensure_open
from app.services.errors import (
    AmountMismatch,
    CustomerNotFound,
    DifferentRestaurantConflict,
    EmptyCart,
    ItemNotFound,
    MissingPickupTime,
    OrderAccessDenied,
    OrderCreationFailed,
)
from app.services.settlement import settle
from app.services.wallet_ops import to_money
from app.utils.db import transactional
from models import db
from models.food_truck import FoodTruckSchedule
from models.item import Item
from models.order import Invoice, ItemOrder, Order, OrderStatus, OrderStatusLog, OrderType, PaymentMethod
from models.user import Role, User
from models.wallet import Transaction

logger = logging.getLogger(__name__)


def _merge_lines(lines: Iterable) -> List[dict]:
    """Normalise ``{item_id, quantity}`` pairs, summing duplicates and dropping empty lines."""
    merged = {}
    for line in lines or []:
        item_id = int(line["item_id"])
        quantity = int(line.get("quantity", 1))
        if quantity < 1:
            continue
        merged[item_id] = merged.get(item_id, 0) + quantity
    return [{"item_id": item_id, "quantity": qty} for item_id, qty in merged.items()]


def _load_items(lines: List[dict]) -> dict:
    ids = [line["item_id"] for line in lines]
    items = {item.id: item for item in Item.query.filter(Item.id.in_(ids)).all()}
    missing = [i for i in ids if i not in items]
    if missing:
        raise ItemNotFound(f"Item not found: {missing[0]}")
    truck_ids = {item.food_truck_id for item in items.values()}
    if len(truck_ids) > 1:
        raise DifferentRestaurantConflict(current_food_truck_id=items[ids[0]].food_truck_id)
    return items


def _place_order_core(
    customer_id,
    lines,
    amount,
    order_type,
    payment_method,
    pickup_datetime: Optional[datetime] = None,
    placed_by=None,
    enforce_schedule: bool = True,
) -> Order:
    lines = _merge_lines(lines)
    if not lines:
        raise EmptyCart()

    order_type = OrderType(order_type)
    payment_method = PaymentMethod(payment_method)
    if order_type == OrderType.PICKUP and pickup_datetime is None:
        raise MissingPickupTime()

    customer = db.session.get(User, customer_id)
    if not customer or customer.role != Role.CUSTOMER.value:
        raise CustomerNotFound()

    items = _load_items(lines)
    food_truck_id = items[lines[0]["item_id"]].food_truck_id
    if placed_by is not None and placed_by.role == Role.STAFF.value and placed_by.food_truck_id != food_truck_id:
        raise OrderAccessDenied()

    if order_type == OrderType.PICKUP and enforce_schedule:
        schedule = FoodTruckSchedule.query.filter_by(food_truck_id=food_truck_id).all()
        ensure_open(schedule, pickup_datetime)

    total = sum(
        (to_money(items[line["item_id"]].price) * line["quantity"] for line in lines),
        Decimal("0"),
    )
    total = to_money(total)
    if amount is not None and to_money(amount) != total:
        raise AmountMismatch()

    result = settle(payment_method, total, customer.id, reference="Order payment")

    order = Order(
        user_id=customer.id,
        placed_by_id=placed_by.id if placed_by is not None else customer.id,
        food_truck_id=food_truck_id,
        type=order_type.value,
        status=OrderStatus.PENDING.value,
        pickup_datetime=pickup_datetime,
    )
    db.session.add(order)
    db.session.flush()

    for line in lines:
        item = items[line["item_id"]]
        db.session.add(
            ItemOrder(
                order_id=order.id,
                item_id=item.id,
                quantity=line["quantity"],
                unit_price=to_money(item.price),
            )
        )
    db.session.add(
        Invoice(
            order_id=order.id,
            amount=total,
            total_amount=total,
            payment_method=payment_method.value,
        )
    )
    db.session.add(
        OrderStatusLog(
            order_id=order.id,
            status=OrderStatus.PENDING.value,
            updated_by=placed_by.id if placed_by is not None else customer.id,
        )
    )
    if result.transaction_id is not None:
        txn = db.session.get(Transaction, result.transaction_id)
        txn.reference = f"Order #{order.id}"
    return order


def place_order(
    customer_id,
    lines,
    amount,
    order_type,
    payment_method,
    pickup_datetime: Optional[datetime] = None,
    placed_by=None,
    enforce_schedule: Optional[bool] = None,
) -> Order:
    """Validate, settle and persist an order as one atomic unit.

    Domain failures (EmptyCart, MissingPickupTime, InsufficientFunds, ...)
    propagate unchanged after the rollback. Any database failure rolls back
    the wallet debit together with the order rows and is reported as
    OrderCreationFailed.
    """
    if enforce_schedule is None:
        enforce_schedule = current_app.config.get("ENFORCE_PICKUP_SCHEDULE", True)
    try:
        with transactional("Order placement failed"):
            order = _place_order_core(
                customer_id,
                lines,
                amount,
                order_type,
                payment_method,
                pickup_datetime=pickup_datetime,
                placed_by=placed_by,
                enforce_schedule=enforce_schedule,
            )
    except SQLAlchemyError as e:
        raise OrderCreationFailed() from e

    ORDERS_PLACED.labels(order.invoice.payment_method, order.type).inc()
    logger.info("Order %s placed for customer %s", order.id, customer_id)
    return order


def get_orders_for_customer(customer_id):
    return (
        Order.query.filter_by(user_id=customer_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_orders_for_food_truck(food_truck_id):
    return (
        Order.query.filter_by(food_truck_id=food_truck_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
