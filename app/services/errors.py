"""Domain failures raised by the cart, settlement and order services.

Every error carries the HTTP status the routes render it with; the message
is safe to show to the end user.
"""


class OrderError(Exception):
    status = 400
    default_message = "Order could not be processed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return str(self)


class EmptyCart(OrderError):
    default_message = "Cart is empty"


class MissingPickupTime(OrderError):
    default_message = "Pickup time is required for pickup"


class ClosedForPickupTime(OrderError):
    default_message = "The food truck is closed at the selected pickup time"


class AmountMismatch(OrderError):
    default_message = "Order amount does not match the cart total"


class DifferentRestaurantConflict(OrderError):
    status = 409
    default_message = "You can only order from one food truck at a time"

    def __init__(self, current_food_truck_id=None, message=None):
        super().__init__(message)
        self.current_food_truck_id = current_food_truck_id


class InsufficientFunds(OrderError):
    default_message = "Insufficient wallet balance"


class WalletNotFound(OrderError):
    status = 404
    default_message = "Wallet not found"


class CustomerNotFound(OrderError):
    status = 404
    default_message = "Customer not found"


class ItemNotFound(OrderError):
    status = 404
    default_message = "Item not found"


class OrderNotFound(OrderError):
    status = 404
    default_message = "Order not found"


class OrderAccessDenied(OrderError):
    status = 403
    default_message = "Unauthorized"


class InvalidTransition(OrderError):
    status = 409
    default_message = "Order status cannot be changed"


class OrderCreationFailed(OrderError):
    status = 500
    default_message = "Order could not be created. Please try again later."
