"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .specification import TransactionSpecification
from .transaction_repository import SqlTransactionRepository
from .unit_of_work import SqlUnitOfWork

__all__ = [
    "SqlAccountRepository",
    "SqlTransactionRepository",
    "SqlUnitOfWork",
    "TransactionSpecification",
]
