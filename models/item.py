# --- models/item.py ---
from models import db, BIGINT
from datetime import datetime


category_item = db.Table(
    "category_item",
    db.Column("category_id", BIGINT, db.ForeignKey("category.id"), primary_key=True),
    db.Column("item_id", BIGINT, db.ForeignKey("item.id"), primary_key=True),
)


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class Item(db.Model):
    __tablename__ = "item"

    id = db.Column(BIGINT, primary_key=True)
    food_truck_id = db.Column(BIGINT, db.ForeignKey("food_truck.id"), nullable=False)

    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(150), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(255), nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    food_truck = db.relationship("FoodTruck", backref=db.backref("items", lazy=True))
    categories = db.relationship("Category", secondary=category_item, backref="items", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "image": self.image,
            "price": float(self.price),
            "food_truck_id": self.food_truck_id,
            "categories": [c.to_dict() for c in self.categories],
        }
