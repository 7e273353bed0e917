import enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.sql import func
from models import db, BIGINT


class OrderType(str, enum.Enum):
    PICKUP = "PICKUP"
    DELIVERY = "DELIVERY"


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY_FOR_PICKUP = "READY_FOR_PICKUP"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, enum.Enum):
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    CASH = "CASH"
    WALLET = "WALLET"


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_user_status", "user_id", "status"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("user.id"), nullable=False)
    placed_by_id = Column(BIGINT, ForeignKey("user.id"), nullable=True)  # staff for assisted orders
    food_truck_id = Column(BIGINT, ForeignKey("food_truck.id"), nullable=False)
    type = Column(String(20), nullable=False)
    status = Column(String(30), nullable=False, default=OrderStatus.PENDING.value)
    pickup_datetime = Column(DateTime, nullable=True)
    feedback = Column(Text, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    user = db.relationship("User", foreign_keys=[user_id], backref="orders", lazy=True)
    placed_by = db.relationship("User", foreign_keys=[placed_by_id], lazy=True)
    food_truck = db.relationship("FoodTruck", backref="orders", lazy=True)
    items = db.relationship("ItemOrder", backref="order", cascade="all, delete-orphan", lazy=True)
    invoice = db.relationship("Invoice", backref="order", uselist=False, cascade="all, delete-orphan", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "placed_by_id": self.placed_by_id,
            "food_truck_id": self.food_truck_id,
            "type": self.type,
            "status": self.status,
            "pickup_datetime": self.pickup_datetime.isoformat() if self.pickup_datetime else None,
            "feedback": self.feedback,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "items": [line.to_dict() for line in self.items],
            "invoice": self.invoice.to_dict() if self.invoice else None,
        }


class ItemOrder(db.Model):
    __tablename__ = "item_order"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id"), nullable=False)
    item_id = Column(BIGINT, ForeignKey("item.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)  # snapshot at order time

    item = db.relationship("Item", lazy=True)

    def to_dict(self):
        return {
            "item_id": self.item_id,
            "name": self.item.name if self.item else None,
            "quantity": self.quantity,
            "unit_price": float(self.unit_price),
            "subtotal": float(self.unit_price * self.quantity),
        }


class Invoice(db.Model):
    __tablename__ = "invoice"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id"), unique=True, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "amount": float(self.amount),
            "total_amount": float(self.total_amount),
            "payment_method": self.payment_method,
        }


class OrderStatusLog(db.Model):
    __tablename__ = "order_status_log"
    id = Column(BIGINT, primary_key=True)
    order_id = Column(BIGINT, ForeignKey("order.id"), nullable=False)
    status = Column(String(30), nullable=False)
    updated_by = Column(BIGINT, nullable=False)
    timestamp = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "order_id": self.order_id,
            "status": self.status,
            "updated_by": self.updated_by,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
