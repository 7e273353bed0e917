from flask import request
from app.utils import ok, error, internal_error_response, transactional, validate_schema
from app.schemas.orders import DepositRequest
from app.services.errors import OrderError, WalletNotFound
from app.services.wallet_ops import deposit, get_wallet_for_user
from . import customer_bp


@customer_bp.route("/wallet", methods=["GET"])
def wallet_overview():
    wallet = get_wallet_for_user(request.user.id)
    if not wallet:
        return error(WalletNotFound.default_message, status=WalletNotFound.status)
    return ok({
        "balance": float(wallet.balance),
        "transactions": [t.to_dict() for t in wallet.transactions[:50]],
    })


@customer_bp.route("/wallet/deposit", methods=["POST"])
@validate_schema(DepositRequest)
def wallet_deposit():
    data: DepositRequest = request.validated_data
    try:
        with transactional("Wallet deposit failed"):
            balance = deposit(request.user.id, data.amount)
        return ok({"balance": float(balance)}, message="Wallet topped up")
    except OrderError as e:
        return error(e.message, status=e.status)
    except Exception:
        return internal_error_response()
