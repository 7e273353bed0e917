import os
import sys
from datetime import time
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.food_truck import FoodTruck, FoodTruckSchedule
from models.item import Item
from models.user import User, Role
from app.services.account_service import create_user
from app.services.wallet_ops import deposit

# 2026-10-20 is a Tuesday (day 2, Sunday-first)
TUESDAY_NOON = "2026-10-20T12:00:00"


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture()
def make_truck(app):
    """Create a food truck open every day 08:00-22:00 with the given menu."""
    def _make(name="Taco Wheels", items=(("Taco", "3.50"), ("Churros", "4.00")), schedule=None):
        truck = FoodTruck(name=name, slug=name.lower().replace(" ", "-"), location="Market Square", phone_no="555-0100")
        db.session.add(truck)
        db.session.flush()
        for day in (range(7) if schedule is None else schedule):
            db.session.add(FoodTruckSchedule(food_truck_id=truck.id, day=day, start_time=time(8, 0), end_time=time(22, 0)))
        created = []
        for item_name, price in items:
            item = Item(
                food_truck_id=truck.id,
                name=item_name,
                slug=f"{truck.slug}-{item_name.lower()}",
                price=Decimal(price),
            )
            db.session.add(item)
            created.append(item)
        db.session.commit()
        return truck, created
    return _make


@pytest.fixture()
def make_customer(app):
    def _make(email="casey@example.com", balance=None):
        user = create_user({"email": email, "password": "password123", "first_name": "Casey", "last_name": "Customer"})
        if balance is not None:
            deposit(user.id, balance)
        db.session.commit()
        return user
    return _make


@pytest.fixture()
def make_member(app):
    """Create a manager or staff user attached to a food truck."""
    def _make(truck, role=Role.MANAGER, email=None):
        user = create_user(
            {
                "email": email or f"{role.value.lower()}-{truck.id}@example.com",
                "password": "password123",
                "first_name": role.value.title(),
                "last_name": "Member",
            },
            role=role,
            food_truck_id=truck.id,
        )
        db.session.commit()
        return user
    return _make


def obtain_token(client, email, role="CUSTOMER", food_truck_id=None):
    resp = client.post("/__auth/login_stub", json={"email": email, "role": role, "food_truck_id": food_truck_id})
    return resp.get_json()["data"]["access"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def user_by_email(email):
    return User.query.filter_by(email=email).first()
