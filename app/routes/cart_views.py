"""Cart endpoints shared by the customer and staff blueprints.

Each blueprint keeps its cart under its own session key, so a staff member
building an order for a customer never touches a cart of their own.
"""
from flask import request, current_app
from models import db
from models.item import Item
from app.utils import ok, error, validate_schema
from app.schemas.orders import CartAddRequest, CartUpdateRequest, CartRemoveRequest
from app.services.cart import CartStore
from app.services.errors import DifferentRestaurantConflict, ItemNotFound


def _cart_payload(cart):
    return {
        "lines": [line.to_dict() for line in cart],
        "food_truck_id": cart.food_truck_id,
        "total": float(cart.total()),
    }


def _too_many(quantity):
    return quantity > current_app.config.get("MAX_QUANTITY_PER_ITEM", 10)


def register_cart_routes(bp, store_key):
    store = CartStore(store_key)

    def view_cart():
        return ok(_cart_payload(store.load()))

    @validate_schema(CartAddRequest)
    def add_to_cart():
        data: CartAddRequest = request.validated_data
        item = db.session.get(Item, data.item_id)
        if not item:
            return error(ItemNotFound.default_message, status=ItemNotFound.status)
        cart = store.load()
        existing = cart.get(item.id)
        if _too_many(data.quantity + (existing.quantity if existing else 0)):
            return error("Maximum quantity per item exceeded", status=400)
        try:
            cart.add(item, data.quantity)
        except DifferentRestaurantConflict as e:
            return error(str(e), status=e.status)
        store.save(cart)
        return ok(_cart_payload(cart), message="Item added to cart")

    @validate_schema(CartUpdateRequest)
    def update_cart():
        data: CartUpdateRequest = request.validated_data
        if _too_many(data.quantity):
            return error("Maximum quantity per item exceeded", status=400)
        cart = store.load()
        if not cart.set_quantity(data.item_id, data.quantity):
            return error("Item not in cart", status=404)
        store.save(cart)
        return ok(_cart_payload(cart), message="Cart updated")

    @validate_schema(CartRemoveRequest)
    def remove_from_cart():
        data: CartRemoveRequest = request.validated_data
        cart = store.load()
        if not cart.remove(data.item_id):
            return error("Item not in cart", status=404)
        store.save(cart)
        return ok(_cart_payload(cart), message="Item removed from cart")

    def clear_cart():
        store.clear()
        return ok(_cart_payload(store.load()), message="Cart cleared")

    bp.add_url_rule("/cart", "view_cart", view_cart, methods=["GET"])
    bp.add_url_rule("/cart/add", "add_to_cart", add_to_cart, methods=["POST"])
    bp.add_url_rule("/cart/update", "update_cart", update_cart, methods=["POST"])
    bp.add_url_rule("/cart/remove", "remove_from_cart", remove_from_cart, methods=["POST"])
    bp.add_url_rule("/cart/clear", "clear_cart", clear_cart, methods=["POST"])
    return store
