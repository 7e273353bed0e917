import os
import click
from flask import current_app
from flask.cli import with_appcontext
from app.utils import transactional
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("seed-demo")
@click.option("--password", default="password123", show_default=True, help="Password for every demo account")
@with_appcontext
def seed_demo(password):
    """Create demo accounts, a food truck with a weekly schedule, categories and menu items."""
    from datetime import time
    from decimal import Decimal
    from models.food_truck import FoodTruck
    from models.user import User, Role
    from app.services.account_service import create_user
    from app.services import catalog_service
    from app.services.wallet_ops import deposit

    if User.query.filter_by(email="admin@example.com").first():
        raise click.ClickException("Demo data already present")

    with transactional("Seeding demo data failed"):
        create_user(
            {"email": "admin@example.com", "password": password, "first_name": "Ada", "last_name": "Admin"},
            role=Role.ADMIN,
        )
        customer = create_user(
            {"email": "customer@example.com", "password": password, "first_name": "Casey", "last_name": "Customer"},
        )
        deposit(customer.id, Decimal("50.00"), reference="demo credit")

        truck = catalog_service.create_food_truck(
            {
                "name": "Taco Wheels",
                "description": "Street tacos and churros",
                "location": "Market Square",
                "phone_no": "555-0100",
                "manager_email": "manager@example.com",
                "manager_password": password,
            }
        )
        create_user(
            {"email": "staff@example.com", "password": password, "first_name": "Sam", "last_name": "Staff"},
            role=Role.STAFF,
            food_truck_id=truck.id,
        )
        catalog_service.save_schedule(
            truck.id,
            [{"day": day, "start_time": time(11, 0), "end_time": time(21, 0)} for day in range(7)],
        )
        mains = catalog_service.create_category("Mains")
        desserts = catalog_service.create_category("Desserts")
        catalog_service.upsert_item(truck.id, {"name": "Al Pastor Taco", "price": Decimal("3.50"), "categories": [mains.id]})
        catalog_service.upsert_item(truck.id, {"name": "Carnitas Taco", "price": Decimal("3.75"), "categories": [mains.id]})
        catalog_service.upsert_item(truck.id, {"name": "Churros", "price": Decimal("4.00"), "categories": [desserts.id]})

    click.echo(f"Demo data created ({FoodTruck.query.count()} food truck). Password: {password}")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_demo)
