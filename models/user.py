# --- models/user.py ---
import enum
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from models import db, BIGINT


class Role(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    STAFF = "STAFF"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone_no = db.Column(db.String(20), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=Role.CUSTOMER.value)

    # Set for STAFF and MANAGER accounts
    food_truck_id = db.Column(BIGINT, db.ForeignKey("food_truck.id"), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    food_truck = db.relationship("FoodTruck", backref=db.backref("staff", lazy=True))
    wallet = db.relationship("Wallet", backref="user", uselist=False, lazy=True)

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_no": self.phone_no,
            "address": self.address,
            "role": self.role,
            "food_truck_id": self.food_truck_id,
        }

    def __repr__(self):
        return f"<User id={self.id} role={self.role}>"
