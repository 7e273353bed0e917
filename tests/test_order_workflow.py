from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.order import Invoice, ItemOrder, Order, OrderStatus, OrderStatusLog
from models.user import Role
from models.wallet import Transaction, TransactionType
from app.services.errors import (
    AmountMismatch,
    ClosedForPickupTime,
    CustomerNotFound,
    DifferentRestaurantConflict,
    EmptyCart,
    InsufficientFunds,
    ItemNotFound,
    MissingPickupTime,
    OrderAccessDenied,
    OrderCreationFailed,
)
from app.services import order_service
from app.services.order_service import place_order
from app.services.wallet_ops import get_wallet_for_user

TUESDAY_NOON = datetime(2026, 10, 20, 12, 0)


def counts():
    return Order.query.count(), Invoice.query.count(), ItemOrder.query.count()


def test_wallet_order_debits_and_creates_pending_order(make_truck, make_customer):
    _, (taco, churros) = make_truck(items=(("Taco", "10.00"), ("Churros", "10.00")))
    customer = make_customer(balance=Decimal("100.00"))

    order = place_order(
        customer.id,
        [{"item_id": taco.id, "quantity": 3}, {"item_id": churros.id, "quantity": 1}],
        Decimal("40.00"),
        "PICKUP",
        "WALLET",
        pickup_datetime=TUESDAY_NOON,
    )

    assert order.status == OrderStatus.PENDING.value
    assert order.invoice.total_amount == Decimal("40.00")
    assert order.invoice.payment_method == "WALLET"
    assert get_wallet_for_user(customer.id).balance == Decimal("60.00")
    payments = Transaction.query.filter_by(type=TransactionType.PAYMENT.value).all()
    assert len(payments) == 1
    assert payments[0].amount == Decimal("-40.00")
    assert payments[0].reference == f"Order #{order.id}"
    assert [log.status for log in OrderStatusLog.query.filter_by(order_id=order.id)] == ["PENDING"]


def test_wallet_order_short_balance_rolls_everything_back(make_truck, make_customer):
    _, (taco, _) = make_truck(items=(("Taco", "150.00"), ("Churros", "1.00")))
    customer = make_customer(balance=Decimal("100.00"))

    with pytest.raises(InsufficientFunds):
        place_order(customer.id, [{"item_id": taco.id, "quantity": 1}], None, "PICKUP", "WALLET",
                    pickup_datetime=TUESDAY_NOON)

    assert counts() == (0, 0, 0)
    assert get_wallet_for_user(customer.id).balance == Decimal("100.00")
    assert Transaction.query.filter_by(type=TransactionType.PAYMENT.value).count() == 0


def test_persistence_failure_after_debit_rolls_back_payment(make_truck, make_customer, monkeypatch):
    _, (taco, _) = make_truck(items=(("Taco", "10.00"), ("Churros", "4.00")))
    customer = make_customer(balance=Decimal("100.00"))

    def failing_invoice(**kwargs):
        raise IntegrityError("INSERT INTO invoice", kwargs, Exception("constraint failed"))

    monkeypatch.setattr(order_service, "Invoice", failing_invoice)
    with pytest.raises(OrderCreationFailed):
        order_service.place_order(customer.id, [{"item_id": taco.id, "quantity": 2}], None, "PICKUP", "WALLET",
                                  pickup_datetime=TUESDAY_NOON)

    assert counts() == (0, 0, 0)
    assert get_wallet_for_user(customer.id).balance == Decimal("100.00")
    assert Transaction.query.filter_by(type=TransactionType.PAYMENT.value).count() == 0


def test_empty_cart_creates_nothing(make_customer):
    customer = make_customer()
    with pytest.raises(EmptyCart):
        place_order(customer.id, [], None, "PICKUP", "CASH", pickup_datetime=TUESDAY_NOON)
    with pytest.raises(EmptyCart):
        place_order(customer.id, [{"item_id": 1, "quantity": 0}], None, "PICKUP", "CASH",
                    pickup_datetime=TUESDAY_NOON)
    assert counts() == (0, 0, 0)


def test_pickup_requires_time(make_truck, make_customer):
    _, (taco, _) = make_truck()
    customer = make_customer()
    with pytest.raises(MissingPickupTime):
        place_order(customer.id, [{"item_id": taco.id, "quantity": 1}], None, "PICKUP", "CASH")


def test_delivery_needs_no_pickup_time(make_truck, make_customer):
    _, (taco, _) = make_truck()
    customer = make_customer()
    order = place_order(customer.id, [{"item_id": taco.id, "quantity": 2}], None, "DELIVERY", "CASH")
    assert order.type == "DELIVERY"
    assert order.pickup_datetime is None


def test_closed_truck_rejects_pickup(make_truck, make_customer):
    _, (taco, _) = make_truck(schedule=[1])  # Mondays only
    customer = make_customer()
    with pytest.raises(ClosedForPickupTime):
        place_order(customer.id, [{"item_id": taco.id, "quantity": 1}], None, "PICKUP", "CASH",
                    pickup_datetime=TUESDAY_NOON)
    assert counts() == (0, 0, 0)


def test_schedule_check_can_be_disabled(make_truck, make_customer):
    _, (taco, _) = make_truck(schedule=[])
    customer = make_customer()
    order = place_order(customer.id, [{"item_id": taco.id, "quantity": 1}], None, "PICKUP", "CASH",
                        pickup_datetime=TUESDAY_NOON, enforce_schedule=False)
    assert order.id is not None


def test_amount_must_match_server_total(make_truck, make_customer):
    _, (taco, _) = make_truck(items=(("Taco", "3.50"), ("Churros", "4.00")))
    customer = make_customer()
    with pytest.raises(AmountMismatch):
        place_order(customer.id, [{"item_id": taco.id, "quantity": 2}], Decimal("6.99"), "PICKUP", "CASH",
                    pickup_datetime=TUESDAY_NOON)
    order = place_order(customer.id, [{"item_id": taco.id, "quantity": 2}], Decimal("7.00"), "PICKUP", "CASH",
                        pickup_datetime=TUESDAY_NOON)
    assert order.invoice.amount == Decimal("7.00")


def test_items_from_two_trucks_conflict(make_truck, make_customer):
    _, (taco, _) = make_truck(name="Taco Wheels")
    _, (pizza, _) = make_truck(name="Pizza Van", items=(("Pizza", "9.00"), ("Calzone", "8.00")))
    customer = make_customer()
    with pytest.raises(DifferentRestaurantConflict):
        place_order(customer.id, [{"item_id": taco.id, "quantity": 1}, {"item_id": pizza.id, "quantity": 1}],
                    None, "DELIVERY", "CASH")


def test_unknown_item(make_customer):
    customer = make_customer()
    with pytest.raises(ItemNotFound):
        place_order(customer.id, [{"item_id": 999, "quantity": 1}], None, "DELIVERY", "CASH")


def test_customer_must_exist_and_be_a_customer(make_truck, make_member):
    truck, (taco, _) = make_truck()
    manager = make_member(truck)
    with pytest.raises(CustomerNotFound):
        place_order(999, [{"item_id": taco.id, "quantity": 1}], None, "DELIVERY", "CASH")
    with pytest.raises(CustomerNotFound):
        place_order(manager.id, [{"item_id": taco.id, "quantity": 1}], None, "DELIVERY", "CASH")


def test_duplicate_lines_are_merged_and_prices_snapshotted(make_truck, make_customer):
    _, (taco, _) = make_truck(items=(("Taco", "3.50"), ("Churros", "4.00")))
    customer = make_customer()
    order = place_order(customer.id, [{"item_id": taco.id, "quantity": 1}, {"item_id": taco.id, "quantity": 2}],
                        None, "DELIVERY", "CASH")
    assert len(order.items) == 1
    assert order.items[0].quantity == 3

    taco.price = Decimal("5.00")
    db.session.commit()
    line = ItemOrder.query.filter_by(order_id=order.id).one()
    assert line.unit_price == Decimal("3.50")


def test_staff_order_records_who_placed_it(make_truck, make_customer, make_member):
    truck, (taco, _) = make_truck()
    staff = make_member(truck, role=Role.STAFF)
    customer = make_customer()
    order = place_order(customer.id, [{"item_id": taco.id, "quantity": 1}], None, "DELIVERY", "CASH",
                        placed_by=staff)
    assert order.user_id == customer.id
    assert order.placed_by_id == staff.id


def test_staff_cannot_order_from_another_truck(make_truck, make_customer, make_member):
    truck, _ = make_truck(name="Taco Wheels")
    _, (pizza, _) = make_truck(name="Pizza Van", items=(("Pizza", "9.00"), ("Calzone", "8.00")))
    staff = make_member(truck, role=Role.STAFF)
    customer = make_customer()
    with pytest.raises(OrderAccessDenied):
        place_order(customer.id, [{"item_id": pizza.id, "quantity": 1}], None, "DELIVERY", "CASH",
                    placed_by=staff)
