from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required
from app.services.cart import STAFF_CART_KEY
from models.user import Role
from ..cart_views import register_cart_routes

staff_bp = Blueprint("staff", __name__, url_prefix=f"{API_PREFIX}/staff")


@staff_bp.before_request
@auth_required
@role_required(Role.STAFF)
def _enforce_staff_role():
    """Ensure the requester is authenticated staff of a food truck."""
    return None


cart_store = register_cart_routes(staff_bp, STAFF_CART_KEY)

from . import customers  # noqa: E402
from . import orders  # noqa: E402
