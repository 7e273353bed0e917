from flask import request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.order import Order
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.orders import PlaceOrderRequest, FeedbackRequest
from app.services.errors import OrderError, OrderNotFound
from app.services.order_service import get_orders_for_customer
from app.services.order_lifecycle import cancel_order, leave_feedback
from ..order_views import place_from_request
from . import customer_bp, cart_store


def _own_order(order_id):
    order = db.session.get(Order, order_id)
    if not order or order.user_id != request.user.id:
        raise OrderNotFound()
    return order


@customer_bp.route("/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(PlaceOrderRequest)
def create_order():
    """Place an order from the session cart or an explicit item list.
    ---
    tags: [Customer]
    responses:
      201: {description: Order placed}
      400: {description: Empty cart, missing pickup time, closed truck or insufficient funds}
      409: {description: Items from more than one food truck}
    """
    try:
        order = place_from_request(request.user.id, cart_store)
        return ok(order.to_dict(), message="Order placed successfully", status=201)
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()


@customer_bp.route("/orders", methods=["GET"])
def order_history():
    orders = get_orders_for_customer(request.user.id)
    return ok([o.to_dict() for o in orders])


@customer_bp.route("/orders/<int:order_id>/cancel", methods=["POST"])
def cancel(order_id):
    try:
        with transactional("Order cancellation failed"):
            order = _own_order(order_id)
            refund = cancel_order(order, request.user)
        return ok({"order": order.to_dict(), "refunded": float(refund)}, message="Order cancelled")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()


@customer_bp.route("/orders/<int:order_id>/feedback", methods=["POST"])
@validate_schema(FeedbackRequest)
def feedback(order_id):
    data: FeedbackRequest = request.validated_data
    try:
        with transactional("Saving feedback failed"):
            order = _own_order(order_id)
            leave_feedback(order, request.user, data.feedback)
        return ok(order.to_dict(), message="Thanks for your feedback")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
