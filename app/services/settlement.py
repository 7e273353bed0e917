"""Monetary side of order placement, per payment method.

Card payments are simulated: details are checked for shape and then
discarded, nothing is sent to a payment processor.
"""
import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator

from app.metrics import SETTLEMENT_FAILURES
from app.services.errors import InsufficientFunds, WalletNotFound
from app.services.wallet_ops import adjust_balance, get_wallet_for_user, to_money
from models.order import PaymentMethod
from models.wallet import TransactionType

logger = logging.getLogger(__name__)

CARD_METHODS = {PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD}


class CardDetails(BaseModel):
    holder_name: str
    card_number: str
    expiry: str  # MM/YY
    cvv: str

    @field_validator("holder_name")
    @classmethod
    def _holder_name(cls, v):
        if not v.strip():
            raise ValueError("Card holder name is required")
        return v.strip()

    @field_validator("card_number")
    @classmethod
    def _card_number(cls, v):
        digits = v.replace(" ", "").replace("_", "")
        if len(digits) != 16 or not digits.isdigit():
            raise ValueError("Card number must be 16 digits")
        return digits

    @field_validator("cvv")
    @classmethod
    def _cvv(cls, v):
        if len(v) != 3 or not v.isdigit():
            raise ValueError("Card CVV must be 3 digits")
        return v

    @field_validator("expiry")
    @classmethod
    def _expiry(cls, v):
        match = re.fullmatch(r"(\d{2})/(\d{2})", v)
        if not match:
            raise ValueError("Card expiry must be in MM/YY format")
        month, year = int(match.group(1)), 2000 + int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError("Card expiry must be in MM/YY format")
        today = date.today()
        if (year, month) < (today.year, today.month):
            raise ValueError("Card has expired")
        return v


class SettlementResult:
    def __init__(self, payment_method: PaymentMethod, amount: Decimal, paid: bool, transaction_id: Optional[int] = None):
        self.payment_method = payment_method
        self.amount = amount
        self.paid = paid
        self.transaction_id = transaction_id

    def __repr__(self):
        return f"<SettlementResult {self.payment_method.value} amount={self.amount} paid={self.paid}>"


def settle(payment_method, amount, wallet_owner_id=None, *, reference: str = None) -> SettlementResult:
    """Validate funds for ``payment_method`` and apply its side effect.

    WALLET locks the owner's wallet row, fails with InsufficientFunds before
    touching anything when the balance is short, and otherwise debits it with
    a PAYMENT ledger entry of ``-amount``. CASH is settled at hand-over and
    card payments are simulated, so neither has a side effect here.
    Never commits; run it inside the caller's transaction.
    """
    method = PaymentMethod(payment_method)
    amount = to_money(amount)

    if method == PaymentMethod.WALLET:
        wallet = get_wallet_for_user(wallet_owner_id, lock=True) if wallet_owner_id is not None else None
        if not wallet:
            SETTLEMENT_FAILURES.labels(method.value, "wallet_not_found").inc()
            raise WalletNotFound()
        if to_money(wallet.balance) < amount:
            SETTLEMENT_FAILURES.labels(method.value, "insufficient_funds").inc()
            logger.info("Wallet %s short for payment of %s", wallet.id, amount)
            raise InsufficientFunds()
        txn = adjust_balance(wallet, -amount, type=TransactionType.PAYMENT.value, reference=reference)
        return SettlementResult(method, amount, paid=True, transaction_id=txn.id)

    if method == PaymentMethod.CASH:
        return SettlementResult(method, amount, paid=False)

    # CREDIT_CARD / DEBIT_CARD: simulated capture
    return SettlementResult(method, amount, paid=True)
