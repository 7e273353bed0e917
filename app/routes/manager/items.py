from flask import request
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.catalog import ItemRequest
from app.services import catalog_service
from app.services.catalog_service import CatalogError
from . import manager_bp


@manager_bp.route("/items", methods=["GET"])
def list_items():
    items = catalog_service.list_items(food_truck_id=request.user.food_truck_id)
    return ok([i.to_dict() for i in items])


@manager_bp.route("/items", methods=["POST"])
@validate_schema(ItemRequest)
def save_item():
    """Create a menu item, or update one when ``item_id`` is given.
    ---
    tags: [Manager]
    responses:
      200: {description: Item saved}
      404: {description: Item belongs to another truck}
    """
    data: ItemRequest = request.validated_data
    try:
        with transactional("Failed to save item"):
            item = catalog_service.upsert_item(request.user.food_truck_id, data.model_dump())
            result = item.to_dict()
        return ok(result, message="Item saved")
    except CatalogError as e:
        return error(str(e), status=e.status)
    except Exception:
        return internal_error_response()
