from .auth import auth_bp
from .catalog import catalog_bp
from .customer import customer_bp
from .staff import staff_bp
from .manager import manager_bp
from .admin import admin_bp


__all__ = [
    'auth_bp',
    'catalog_bp',
    'customer_bp',
    'staff_bp',
    'manager_bp',
    'admin_bp',
]
