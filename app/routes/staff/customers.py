from flask import request
from models import db
from models.user import User, Role
from app.utils import ok, error
from app.services.account_service import list_customers
from app.services.errors import CustomerNotFound
from . import staff_bp


@staff_bp.route("/customers", methods=["GET"])
def customers():
    """Customer lookup for staff-assisted orders, optionally filtered by ``q``."""
    found = list_customers(request.args.get("q"))
    return ok([c.to_dict() for c in found])


@staff_bp.route("/customers/<int:customer_id>", methods=["GET"])
def customer_detail(customer_id):
    customer = db.session.get(User, customer_id)
    if not customer or customer.role != Role.CUSTOMER.value:
        return error(CustomerNotFound.default_message, status=CustomerNotFound.status)
    data = customer.to_dict()
    data["orders"] = [o.to_dict() for o in customer.orders if o.food_truck_id == request.user.food_truck_id]
    return ok(data)
