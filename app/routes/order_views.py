from flask import request
from app.services.errors import EmptyCart
from app.services.order_service import place_order


def place_from_request(customer_id, store, placed_by=None):
    """Place an order from the validated request body, falling back to the session cart.

    A cart order is checked against the cart total unless ``amount`` is given.
    The session cart is cleared only after the order is committed.
    """
    data = request.validated_data
    amount = data.amount
    if data.items is not None:
        lines = [line.model_dump() for line in data.items]
        from_cart = False
    else:
        cart = store.load()
        if cart.is_empty:
            raise EmptyCart()
        lines = cart.as_order_lines()
        from_cart = True
        # Prices snapshotted in the cart must still match the menu
        if amount is None:
            amount = cart.total()

    order = place_order(
        customer_id,
        lines,
        amount,
        data.order_type,
        data.payment_method,
        pickup_datetime=data.pickup_datetime,
        placed_by=placed_by,
    )
    if from_cart:
        store.clear()
    return order
