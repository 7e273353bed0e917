from decimal import Decimal, ROUND_HALF_UP
from models.wallet import Wallet, Transaction, TransactionType
from models import db
from app.services.errors import InsufficientFunds, WalletNotFound

TWOPLACES = Decimal("0.01")


def to_money(value) -> Decimal:
    d = Decimal(str(value))
    return d.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def create_wallet(user_id) -> Wallet:
    wallet = Wallet(user_id=user_id, balance=to_money("0"))
    db.session.add(wallet)
    db.session.flush()
    return wallet


def get_wallet_for_user(user_id, *, lock: bool = False):
    query = Wallet.query.filter_by(user_id=user_id)
    if lock:
        query = query.with_for_update(of=Wallet)
    return query.first()


def adjust_balance(wallet: Wallet, delta, *, type: str, reference: str = None) -> Transaction:
    """
    Adjust ``wallet`` by ``delta`` (Decimal/str/number) and append a ledger row
    with the signed amount in the same DB transaction.
    Prevents negative balances. Does NOT commit; caller is responsible for
    commit/rollback.
    """
    amount = to_money(delta)
    new_balance = to_money(wallet.balance) + amount
    if new_balance < to_money("0"):
        raise InsufficientFunds()

    wallet.balance = new_balance
    txn = Transaction(
        wallet_id=wallet.id,
        amount=amount,
        type=type,
        reference=reference,
    )
    db.session.add(txn)
    db.session.flush()
    return txn


def deposit(user_id, amount, *, reference: str = "deposit") -> Decimal:
    """Credit a customer's wallet. Returns the new balance. Does NOT commit."""
    amount = to_money(amount)
    if amount <= 0:
        raise ValueError("Deposit amount must be positive")
    wallet = get_wallet_for_user(user_id, lock=True)
    if not wallet:
        raise WalletNotFound()
    adjust_balance(wallet, amount, type=TransactionType.DEPOSIT.value, reference=reference)
    return to_money(wallet.balance)
