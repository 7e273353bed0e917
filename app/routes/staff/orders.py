from flask import request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.utils import ok, error, internal_error_response, validate_schema
from app.schemas.orders import PlaceOrderRequest
from app.services.errors import OrderError
from app.services.order_service import get_orders_for_food_truck
from ..order_views import place_from_request
from . import staff_bp, cart_store


@staff_bp.route("/customers/<int:customer_id>/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(PlaceOrderRequest)
def order_for_customer(customer_id):
    """Place an order on behalf of a customer from the staff cart.
    ---
    tags: [Staff]
    responses:
      201: {description: Order placed}
      404: {description: Unknown customer}
    """
    try:
        order = place_from_request(customer_id, cart_store, placed_by=request.user)
        return ok(order.to_dict(), message="Order placed successfully", status=201)
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()


@staff_bp.route("/orders", methods=["GET"])
def truck_orders():
    orders = get_orders_for_food_truck(request.user.food_truck_id)
    return ok([o.to_dict() for o in orders])
