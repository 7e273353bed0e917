from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required
from models.user import Role

manager_bp = Blueprint("manager", __name__, url_prefix=f"{API_PREFIX}/manager")


@manager_bp.before_request
@auth_required
@role_required(Role.MANAGER)
def _enforce_manager_role():
    """Ensure the requester is an authenticated food truck manager."""
    return None


from . import schedule  # noqa: E402
from . import items  # noqa: E402
from . import employees  # noqa: E402
from . import orders  # noqa: E402
