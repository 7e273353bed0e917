from models import db, BIGINT
from datetime import datetime


class FoodTruck(db.Model):
    __tablename__ = "food_truck"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(255), nullable=True)
    location = db.Column(db.String(255), nullable=False)
    phone_no = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self, with_schedule=True):
        data = {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "image": self.image,
            "location": self.location,
            "phone_no": self.phone_no,
        }
        if with_schedule:
            data["schedule"] = [entry.as_dict() for entry in sorted(self.schedule, key=lambda e: e.day)]
        return data


class FoodTruckSchedule(db.Model):
    __tablename__ = "food_truck_schedule"
    __table_args__ = (
        db.UniqueConstraint("food_truck_id", "day", name="uq_schedule_truck_day"),
    )

    id = db.Column(BIGINT, primary_key=True)
    food_truck_id = db.Column(BIGINT, db.ForeignKey("food_truck.id"), nullable=False)
    day = db.Column(db.Integer, nullable=False)  # 0 = Sunday, 6 = Saturday
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    food_truck = db.relationship("FoodTruck", backref=db.backref("schedule", lazy=True, cascade="all, delete-orphan"))

    def as_dict(self):
        return {
            "day": self.day,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
        }
