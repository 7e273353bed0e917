from flask import request
from models import db
from models.order import Order
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.orders import StatusUpdateRequest
from app.services.errors import OrderError, OrderNotFound
from app.services.order_service import get_orders_for_food_truck
from app.services.order_lifecycle import approve_order, reject_order, update_status, allowed_statuses
from . import manager_bp


def _load(order_id):
    order = db.session.get(Order, order_id)
    if not order:
        raise OrderNotFound()
    return order


@manager_bp.route("/orders", methods=["GET"])
def truck_orders():
    orders = get_orders_for_food_truck(request.user.food_truck_id)
    result = []
    for order in orders:
        data = order.to_dict()
        data["allowed_statuses"] = [s.value for s in allowed_statuses(order)]
        result.append(data)
    return ok(result)


@manager_bp.route("/orders/<int:order_id>/approve", methods=["POST"])
def approve(order_id):
    try:
        with transactional("Order approval failed"):
            order = _load(order_id)
            approve_order(order, request.user)
        return ok(order.to_dict(), message="Order approved")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()


@manager_bp.route("/orders/<int:order_id>/reject", methods=["POST"])
def reject(order_id):
    try:
        with transactional("Order rejection failed"):
            order = _load(order_id)
            refund = reject_order(order, request.user)
        return ok({"order": order.to_dict(), "refunded": float(refund)}, message="Order rejected")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()


@manager_bp.route("/orders/<int:order_id>/status", methods=["POST"])
@validate_schema(StatusUpdateRequest)
def change_status(order_id):
    """Move an approved order forward.
    ---
    tags: [Manager]
    responses:
      200: {description: Status updated}
      409: {description: Transition not allowed}
    """
    data: StatusUpdateRequest = request.validated_data
    try:
        with transactional("Order status update failed"):
            order = _load(order_id)
            update_status(order, data.status, request.user)
        return ok(order.to_dict(), message="Order status updated")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
