from flask import Blueprint, request, jsonify, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.user import User
from app.version import API_PREFIX
from app.utils import (
    auth_required,
    error,
    ok,
    internal_error_response,
    transactional,
    validate_schema,
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)
from app.schemas.auth import RegisterRequest, LoginRequest, RefreshRequest
from app.services.account_service import AccountError, create_user, verify_login


auth_bp = Blueprint("auth", __name__, url_prefix=API_PREFIX)


def _token_pair(user):
    return {
        "access_token": create_access_token(user.id, user.role),
        "refresh_token": create_refresh_token(user.id),
        "expires_in": current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    }


@auth_bp.route("/register", methods=["POST"])
@validate_schema(RegisterRequest)
def register():
    """Register a customer account.
    ---
    tags: [Auth]
    responses:
      201: {description: Account created, wallet opened}
      409: {description: Email already registered}
    """
    data: RegisterRequest = request.validated_data
    try:
        with transactional("Registration failed"):
            user = create_user(data.model_dump())
        payload = {"user": user.to_dict()}
        payload.update(_token_pair(user))
        return ok(payload, message="Account created", status=201)
    except AccountError as e:
        return error(str(e), status=409)
    except Exception:
        return internal_error_response()


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts from this IP",
)
@validate_schema(LoginRequest)
def login():
    """Exchange email and password for a token pair.
    ---
    tags: [Auth]
    responses:
      200: {description: Tokens issued}
      401: {description: Invalid credentials}
    """
    data: LoginRequest = request.validated_data
    user = verify_login(data.email, data.password)
    if not user:
        return error("Invalid email or password", status=401)
    payload = {"user": user.to_dict()}
    payload.update(_token_pair(user))
    return ok(payload, message="Logged in")


@auth_bp.route("/auth/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        return error(str(e), status=401)

    user = db.session.get(User, int(payload["sub"]))
    if not user:
        return error("User not found", status=401)
    return jsonify(_token_pair(user)), 200


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me():
    user = request.user
    data = user.to_dict()
    if user.wallet is not None:
        data["wallet_balance"] = float(user.wallet.balance)
    return ok(data)
