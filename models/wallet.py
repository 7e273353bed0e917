import enum
from sqlalchemy import Column, String, Numeric, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from models import db, BIGINT


class TransactionType(str, enum.Enum):
    DEPOSIT = "DEPOSIT"
    PAYMENT = "PAYMENT"
    REFUND = "REFUND"


class Wallet(db.Model):
    __tablename__ = "wallet"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_wallet_balance_non_negative"),
    )
    id = Column(BIGINT, primary_key=True)
    user_id = Column(BIGINT, ForeignKey("user.id"), unique=True, nullable=False)
    balance = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    transactions = db.relationship(
        "Transaction", backref="wallet", lazy=True, order_by="Transaction.id.desc()"
    )


class Transaction(db.Model):
    __tablename__ = "transaction"
    id = Column(BIGINT, primary_key=True)
    wallet_id = Column(BIGINT, ForeignKey("wallet.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)  # negative for payments
    type = Column(String(20), nullable=False)
    reference = Column(Text, nullable=True)  # order id or message
    created_at = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "amount": float(self.amount),
            "type": self.type,
            "reference": self.reference,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
