from functools import wraps
from flask import request, g
from .responses import error
from .jwt import decode_token, TokenError
from models import db
from models.user import User


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = request.headers.get("Authorization", "")
        if not auth:
            return error("Auth header missing", status=401)
        token = auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)

        user = db.session.get(User, int(payload["sub"]))
        if not user:
            return error("User not found", status=401)
        g.user_id = user.id
        g.role = user.role
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def _value(entry):
    return getattr(entry, "value", entry)


def role_required(required):
    """Authorize based on user role; ``required`` is a Role, its value, or a collection of either."""
    required_set = {_value(r) for r in _to_set(required)}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = getattr(getattr(request, "user", None), "role", None) or getattr(g, "role", None)
            if not role:
                return error("Role missing", status=403)
            if role not in required_set:
                return error("Forbidden", status=403)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
