"""Domain models for ledger entries, transfer requests and summaries."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class TransactionStatus(str, enum.Enum):
    SUCCESSFUL = "SUCCESSFUL"
    INSUFFICIENT_FUND = "INSUFFICIENT_FUND"
    FAILED = "FAILED"


SUCCESS_MESSAGE = "Transaction Successful"


@dataclass(slots=True)
class TransferRequest:
    reference: str
    amount: Decimal
    currency: str
    source_account_number: str
    destination_account_number: str
    description: Optional[str] = None


@dataclass(slots=True)
class Transaction:
    """A ledger entry. ``status`` stays ``None`` until the engine decides the outcome."""

    reference: str
    amount: Decimal
    fee: Decimal
    billed_amount: Decimal
    currency: str
    source_account_number: str
    destination_account_number: str
    created_at: datetime
    description: Optional[str] = None
    status: Optional[TransactionStatus] = None
    status_message: Optional[str] = None
    commission_worthy: bool = False
    commission: Optional[Decimal] = None
    id: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not None

    def mark(self, status: TransactionStatus, message: str) -> None:
        if self.is_terminal:
            raise ValueError(f"Transaction {self.reference} already has status {self.status.value}")
        self.status = status
        self.status_message = message


@dataclass(slots=True)
class TransferResult:
    transaction: Transaction
    success: bool
    message: str
    error_code: Optional[str] = None

    @classmethod
    def succeeded(cls, transaction: Transaction) -> "TransferResult":
        return cls(transaction=transaction, success=True, message=transaction.status_message or SUCCESS_MESSAGE)

    @classmethod
    def failed(cls, transaction: Transaction, error_code: str) -> "TransferResult":
        return cls(
            transaction=transaction,
            success=False,
            message=transaction.status_message or "",
            error_code=error_code,
        )


@dataclass(slots=True)
class TransactionSummary:
    start: datetime
    end: datetime
    total_transactions: int
    successful_transactions: int
    failed_transactions: int
    insufficient_fund_transactions: int
    total_amount: Decimal
    total_commission: Decimal


@dataclass(slots=True)
class TransactionFilter:
    """Optional predicates over the ledger, combined conjunctively."""

    status: Optional[TransactionStatus] = None
    source_account_number: Optional[str] = None
    destination_account_number: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


@dataclass(slots=True)
class CommissionRunReport:
    start: datetime
    end: datetime
    candidates: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    failed_references: list[str] = field(default_factory=list)
