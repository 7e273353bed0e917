from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import auth_required, role_required, ok, error, internal_error_response, transactional, validate_schema
from app.schemas.catalog import FoodTruckCreateRequest, CategoryRequest
from app.services import catalog_service
from app.services.catalog_service import CatalogError
from app.services.account_service import AccountError
from models.user import Role

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")


@admin_bp.before_request
@auth_required
@role_required(Role.ADMIN)
def _enforce_admin_role():
    """Ensure the requester is an authenticated admin."""
    return None


@admin_bp.route("/food-trucks", methods=["GET"])
def list_food_trucks():
    trucks = catalog_service.list_food_trucks()
    return ok([t.to_dict(with_schedule=False) for t in trucks])


@admin_bp.route("/food-trucks", methods=["POST"])
@validate_schema(FoodTruckCreateRequest)
def create_food_truck():
    """Onboard a food truck together with its manager account.
    ---
    tags: [Admin]
    responses:
      201: {description: Food truck created}
      400: {description: Duplicate truck name}
      409: {description: Manager email already registered}
    """
    data: FoodTruckCreateRequest = request.validated_data
    try:
        with transactional("Failed to create food truck"):
            truck = catalog_service.create_food_truck(data.model_dump())
            result = truck.to_dict()
        return ok(result, message="Food truck created", status=201)
    except CatalogError as e:
        return error(str(e), status=e.status)
    except AccountError as e:
        return error(str(e), status=409)
    except Exception:
        return internal_error_response()


@admin_bp.route("/categories", methods=["GET"])
def list_categories():
    return ok([c.to_dict() for c in catalog_service.list_categories()])


@admin_bp.route("/categories", methods=["POST"])
@validate_schema(CategoryRequest)
def create_category():
    data: CategoryRequest = request.validated_data
    try:
        with transactional("Failed to create category"):
            category = catalog_service.create_category(data.name)
            result = category.to_dict()
        return ok(result, message="Category created", status=201)
    except CatalogError as e:
        return error(str(e), status=e.status)
    except Exception:
        return internal_error_response()
