import logging
from sqlalchemy import func
from models import db
from models.user import User, Role
from app.services.wallet_ops import create_wallet

logger = logging.getLogger(__name__)


class AccountError(Exception):
    pass


def _email_taken(email: str) -> bool:
    return db.session.query(User.id).filter(func.lower(User.email) == email.lower()).first() is not None


def create_user(data, role: Role = Role.CUSTOMER, food_truck_id=None) -> User:
    """Create a user; customers get an empty wallet in the same transaction. Does NOT commit."""
    email = data["email"].strip().lower()
    if _email_taken(email):
        raise AccountError("Email already registered")
    user = User(
        email=email,
        first_name=data["first_name"],
        last_name=data["last_name"],
        phone_no=data.get("phone_no"),
        address=data.get("address"),
        role=role.value,
        food_truck_id=food_truck_id,
    )
    user.set_password(data["password"])
    db.session.add(user)
    db.session.flush()
    if role == Role.CUSTOMER:
        create_wallet(user.id)
    logger.info("Created %s user %s", role.value.lower(), user.id)
    return user


def verify_login(email: str, password: str):
    user = User.query.filter(func.lower(User.email) == (email or "").strip().lower()).first()
    if not user or not user.check_password(password or ""):
        return None
    return user


def list_customers(search: str = None):
    query = User.query.filter_by(role=Role.CUSTOMER.value)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            db.or_(
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
                User.email.ilike(pattern),
            )
        )
    return query.order_by(User.first_name.asc(), User.last_name.asc()).all()
