"""SQLAlchemy ORM models."""

from decimal import Decimal

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func, expression
from sqlalchemy.types import TypeDecorator

from transfer_service.domain.transactions.fees import MONEY_PLACES, MONEY_QUANTUM
from transfer_service.infrastructure.database.base import Base


class Money(TypeDecorator):
    """Exact decimal kept as fixed-point text, e.g. ``"5.02500000"``.

    Backends such as SQLite store ``NUMERIC`` as a float, so balances and
    amounts are persisted as strings and all arithmetic happens on
    :class:`~decimal.Decimal` values in Python.
    """

    impl = String
    cache_ok = True

    def __init__(self) -> None:
        super().__init__(length=40)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        quantized = amount.quantize(MONEY_QUANTUM)
        if quantized != amount:
            raise ValueError(f"{value} has more than {MONEY_PLACES} decimal places")
        return format(quantized, "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        Index("accounts_idx_number_created_status", "account_number", "created_at", "status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_number = Column(String(20), unique=True, nullable=False)
    account_name = Column(String(100), nullable=False)
    balance = Column(Money(), nullable=False, default=Decimal("0"))
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False, default="ACTIVE")
    deleted = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("transactions_idx_reference_amount_created_status", "reference", "amount", "created_at", "status"),
        Index("transactions_idx_source_destination", "source_account_number", "destination_account_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    reference = Column(String(64), unique=True, nullable=False)
    amount = Column(Money(), nullable=False)
    fee = Column(Money(), nullable=False)
    billed_amount = Column(Money(), nullable=False)
    currency = Column(String(3), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False)
    status_message = Column(String(255))
    commission_worthy = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    commission = Column(Money())
    source_account_number = Column(String(20), nullable=False)
    destination_account_number = Column(String(20), nullable=False)
    deleted = Column(Boolean, nullable=False, default=False, server_default=expression.false())
