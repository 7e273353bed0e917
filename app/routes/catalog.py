from datetime import date, datetime
from flask import Blueprint, request
from models.food_truck import FoodTruckSchedule
from app.version import API_PREFIX
from app.utils import ok, error
from app.services import catalog_service
from app.services.catalog_service import CatalogError
from app.services.availability import is_open

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)


@catalog_bp.route("/food-trucks", methods=["GET"])
def list_food_trucks():
    """List every food truck with its weekly schedule.
    ---
    tags: [Catalog]
    responses:
      200: {description: Food trucks}
    """
    trucks = catalog_service.list_food_trucks()
    return ok([t.to_dict() for t in trucks])


@catalog_bp.route("/food-trucks/<slug>", methods=["GET"])
def get_food_truck(slug):
    try:
        truck = catalog_service.get_food_truck_by_slug(slug)
    except CatalogError as e:
        return error(str(e), status=e.status)
    data = truck.to_dict()
    data["items"] = [i.to_dict() for i in catalog_service.list_items(food_truck_id=truck.id)]
    return ok(data)


@catalog_bp.route("/food-trucks/<slug>/availability", methods=["GET"])
def food_truck_availability(slug):
    """Check whether a truck is open at a pickup date and time.
    ---
    tags: [Catalog]
    parameters:
      - {name: date, in: query, type: string, required: true, description: YYYY-MM-DD}
      - {name: time, in: query, type: string, required: true, description: HH:MM}
    responses:
      200: {description: Open/closed flag}
      400: {description: Bad date or time}
    """
    try:
        truck = catalog_service.get_food_truck_by_slug(slug)
    except CatalogError as e:
        return error(str(e), status=e.status)
    try:
        pickup_date = date.fromisoformat(request.args.get("date", ""))
        pickup_time = datetime.strptime(request.args.get("time", ""), "%H:%M").time()
    except ValueError:
        return error("date must be YYYY-MM-DD and time HH:MM", status=400)

    schedule = FoodTruckSchedule.query.filter_by(food_truck_id=truck.id).all()
    return ok({
        "food_truck_id": truck.id,
        "date": pickup_date.isoformat(),
        "time": pickup_time.strftime("%H:%M"),
        "open": is_open(schedule, pickup_date, pickup_time),
    })


@catalog_bp.route("/items", methods=["GET"])
def list_items():
    category = request.args.get("category", type=int)
    items = catalog_service.list_items(category_id=category)
    return ok([i.to_dict() for i in items])


@catalog_bp.route("/items/<slug>", methods=["GET"])
def get_item(slug):
    try:
        item = catalog_service.get_item_by_slug(slug)
    except CatalogError as e:
        return error(str(e), status=e.status)
    return ok(item.to_dict())


@catalog_bp.route("/categories", methods=["GET"])
def list_categories():
    return ok([c.to_dict() for c in catalog_service.list_categories()])
