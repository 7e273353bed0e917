"""Order status transitions after creation.

PENDING -> PREPARING -> READY_FOR_PICKUP | DELIVERED -> COMPLETED, with
REJECTED and CANCELLED as the other exits from PENDING. None of these
functions commit; routes wrap them in ``transactional``.
"""
import logging
from decimal import Decimal

from app.metrics import ORDER_TRANSITIONS
from app.services.errors import InvalidTransition, OrderAccessDenied, OrderError
from app.services.wallet_ops import adjust_balance, get_wallet_for_user, to_money
from models import db
from models.order import Order, OrderStatus, OrderStatusLog, OrderType, PaymentMethod
from models.user import Role
from models.wallet import TransactionType

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = {OrderStatus.COMPLETED, OrderStatus.REJECTED, OrderStatus.CANCELLED}
FULFILLED_STATUSES = {OrderStatus.READY_FOR_PICKUP, OrderStatus.DELIVERED, OrderStatus.COMPLETED}

ALLOWED_STATUS_UPDATES = {
    OrderType.PICKUP: [OrderStatus.PREPARING, OrderStatus.READY_FOR_PICKUP, OrderStatus.COMPLETED],
    OrderType.DELIVERY: [OrderStatus.PREPARING, OrderStatus.DELIVERED, OrderStatus.COMPLETED],
}


def allowed_statuses(order: Order):
    return ALLOWED_STATUS_UPDATES[OrderType(order.type)]


def _set_status(order: Order, new_status: OrderStatus, actor) -> None:
    previous = order.status
    order.status = new_status.value
    db.session.add(OrderStatusLog(order_id=order.id, status=new_status.value, updated_by=actor.id))
    ORDER_TRANSITIONS.labels(new_status.value).inc()
    logger.info("Order %s: %s -> %s by user %s", order.id, previous, new_status.value, actor.id)


def _refund_if_wallet_paid(order: Order) -> Decimal:
    invoice = order.invoice
    if not invoice or invoice.payment_method != PaymentMethod.WALLET.value:
        return Decimal("0")
    wallet = get_wallet_for_user(order.user_id, lock=True)
    if not wallet:
        return Decimal("0")
    amount = to_money(invoice.total_amount)
    adjust_balance(wallet, amount, type=TransactionType.REFUND.value, reference=f"Order #{order.id} refund")
    return amount


def ensure_truck_access(order: Order, actor) -> None:
    """Managers and staff may only act on orders for their own food truck."""
    if actor.role == Role.ADMIN.value:
        return
    if actor.role not in (Role.MANAGER.value, Role.STAFF.value) or actor.food_truck_id != order.food_truck_id:
        raise OrderAccessDenied()


def cancel_order(order: Order, actor) -> Decimal:
    """Customer cancellation, only while PENDING. Returns the wallet refund (0 for other methods)."""
    if order.user_id != actor.id:
        raise OrderAccessDenied()
    if OrderStatus(order.status) != OrderStatus.PENDING:
        raise InvalidTransition("Only pending orders can be cancelled")
    _set_status(order, OrderStatus.CANCELLED, actor)
    return _refund_if_wallet_paid(order)


def approve_order(order: Order, actor) -> None:
    ensure_truck_access(order, actor)
    if OrderStatus(order.status) != OrderStatus.PENDING:
        raise InvalidTransition("Only pending orders can be approved")
    _set_status(order, OrderStatus.PREPARING, actor)


def reject_order(order: Order, actor) -> Decimal:
    ensure_truck_access(order, actor)
    if OrderStatus(order.status) != OrderStatus.PENDING:
        raise InvalidTransition("Only pending orders can be rejected")
    _set_status(order, OrderStatus.REJECTED, actor)
    return _refund_if_wallet_paid(order)


def update_status(order: Order, new_status, actor) -> None:
    """Move an approved order forward along its type's status list.

    Steps may be skipped (PREPARING straight to COMPLETED) but never
    reversed, and PENDING or terminal orders cannot be updated here.
    """
    ensure_truck_access(order, actor)
    try:
        target = OrderStatus(new_status)
    except ValueError:
        raise InvalidTransition("Invalid status")
    chain = allowed_statuses(order)
    if target not in chain:
        raise InvalidTransition(f"Status {target.value} is not valid for {order.type.lower()} orders")

    current = OrderStatus(order.status)
    if current == OrderStatus.PENDING:
        raise InvalidTransition("Order must be approved first")
    if current in TERMINAL_STATUSES:
        raise InvalidTransition("Order is already closed")
    if chain.index(target) <= chain.index(current):
        raise InvalidTransition(f"Order is already {current.value}")
    _set_status(order, target, actor)


def leave_feedback(order: Order, actor, feedback: str) -> None:
    if order.user_id != actor.id:
        raise OrderAccessDenied()
    feedback = (feedback or "").strip()
    if not feedback:
        raise OrderError("Feedback is required")
    if OrderStatus(order.status) not in FULFILLED_STATUSES:
        raise InvalidTransition("Feedback can only be left for fulfilled orders")
    if order.feedback:
        raise InvalidTransition("Feedback already submitted")
    order.feedback = feedback
