from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required
from app.services.cart import CUSTOMER_CART_KEY
from models.user import Role
from ..cart_views import register_cart_routes

customer_bp = Blueprint("customer", __name__, url_prefix=f"{API_PREFIX}/customer")


@customer_bp.before_request
@auth_required
@role_required(Role.CUSTOMER)
def _enforce_customer_role():
    """Ensure the requester is an authenticated customer."""
    return None


cart_store = register_cart_routes(customer_bp, CUSTOMER_CART_KEY)

from . import orders  # noqa: E402
from . import wallet  # noqa: E402
