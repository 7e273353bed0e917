from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .user import User, Role  # noqa: F401,E402
from .food_truck import FoodTruck, FoodTruckSchedule  # noqa: F401,E402
from .item import Item, Category  # noqa: F401,E402
from .order import Order, ItemOrder, Invoice, OrderStatusLog  # noqa: F401,E402
from .wallet import Wallet, Transaction  # noqa: F401,E402
