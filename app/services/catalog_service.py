import logging
from models import db
from models.food_truck import FoodTruck, FoodTruckSchedule
from models.item import Item, Category
from models.user import Role
from app.services.account_service import create_user
from app.services.availability import validate_schedule_entry
from app.services.wallet_ops import to_money
from app.utils.slug import slugify, unique_slug

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    status = 400


class CatalogNotFound(CatalogError):
    status = 404


def list_food_trucks():
    return FoodTruck.query.order_by(FoodTruck.name.asc()).all()


def get_food_truck_by_slug(slug: str) -> FoodTruck:
    truck = FoodTruck.query.filter_by(slug=slug).first()
    if not truck:
        raise CatalogNotFound("Food truck not found")
    return truck


def create_food_truck(data) -> FoodTruck:
    """Onboard a food truck together with its manager account. Does NOT commit."""
    try:
        slug = slugify(data["name"])
    except ValueError as e:
        raise CatalogError(str(e))
    if FoodTruck.query.filter_by(slug=slug).first():
        raise CatalogError("A food truck with this name already exists")
    truck = FoodTruck(
        name=data["name"],
        slug=slug,
        description=data.get("description"),
        image=data.get("image"),
        location=data["location"],
        phone_no=data["phone_no"],
    )
    db.session.add(truck)
    db.session.flush()
    manager = create_user(
        {
            "email": data["manager_email"],
            "password": data["manager_password"],
            "first_name": data["name"],
            "last_name": "Owner",
            "phone_no": data.get("manager_phone_no"),
        },
        role=Role.MANAGER,
        food_truck_id=truck.id,
    )
    logger.info("Onboarded food truck %s with manager %s", truck.id, manager.id)
    return truck


def save_schedule(food_truck_id, entries):
    """Upsert weekly schedule entries, one per day.

    An entry with no times (``closed``) removes that day. Every entry is
    validated before anything is written.
    """
    to_write, to_close = {}, set()
    for entry in entries:
        day = entry["day"]
        if entry.get("closed"):
            to_close.add(day)
            continue
        try:
            validate_schedule_entry(day, entry.get("start_time"), entry.get("end_time"))
        except ValueError as e:
            raise CatalogError(str(e))
        to_write[day] = (entry["start_time"], entry["end_time"])

    existing = {e.day: e for e in FoodTruckSchedule.query.filter_by(food_truck_id=food_truck_id).all()}
    for day in to_close:
        if day in existing:
            db.session.delete(existing[day])
    for day, (start, end) in to_write.items():
        row = existing.get(day)
        if row:
            row.start_time, row.end_time = start, end
        else:
            db.session.add(FoodTruckSchedule(food_truck_id=food_truck_id, day=day, start_time=start, end_time=end))
    db.session.flush()
    return (
        FoodTruckSchedule.query.filter_by(food_truck_id=food_truck_id)
        .order_by(FoodTruckSchedule.day.asc())
        .all()
    )


def list_items(category_id=None, food_truck_id=None):
    query = Item.query
    if category_id is not None:
        query = query.filter(Item.categories.any(Category.id == category_id))
    if food_truck_id is not None:
        query = query.filter_by(food_truck_id=food_truck_id)
    return query.order_by(Item.name.asc()).all()


def get_item_by_slug(slug: str) -> Item:
    item = Item.query.filter_by(slug=slug).first()
    if not item:
        raise CatalogNotFound("Item not found")
    return item


def _categories(ids):
    if not ids:
        return []
    found = Category.query.filter(Category.id.in_(ids)).all()
    if len(found) != len(set(ids)):
        raise CatalogError("Unknown category")
    return found


def upsert_item(food_truck_id, data) -> Item:
    """Create an item for the truck, or update it when ``item_id`` is given. Does NOT commit."""
    item_id = data.get("item_id")
    if item_id:
        item = db.session.get(Item, item_id)
        if not item or item.food_truck_id != food_truck_id:
            raise CatalogNotFound("Item not found")
    else:
        try:
            slug = unique_slug(data["name"])
        except ValueError as e:
            raise CatalogError(str(e))
        item = Item(food_truck_id=food_truck_id, slug=slug)
        db.session.add(item)
    item.name = data["name"]
    item.description = data.get("description")
    item.image = data.get("image")
    item.price = to_money(data["price"])
    item.categories = _categories(data.get("categories") or [])
    db.session.flush()
    return item


def list_categories():
    return Category.query.order_by(Category.name.asc()).all()


def create_category(name: str) -> Category:
    name = name.strip()
    if Category.query.filter(db.func.lower(Category.name) == name.lower()).first():
        raise CatalogError("Category already exists")
    category = Category(name=name)
    db.session.add(category)
    db.session.flush()
    return category
