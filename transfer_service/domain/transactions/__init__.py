from .commission import CommissionService
from .exceptions import (
    CurrencyMismatchError,
    DuplicateReferenceError,
    InsufficientFundsError,
    SameAccountError,
    TransactionError,
    TransferExecutionError,
    TransferRejectedError,
    ValidationFailureError,
)
from .fees import MONEY_PLACES, FeePolicy, calculate_fee, has_money_scale, to_money
from .models import (
    SUCCESS_MESSAGE,
    CommissionRunReport,
    Page,
    Transaction,
    TransactionFilter,
    TransactionStatus,
    TransactionSummary,
    TransferRequest,
    TransferResult,
)
from .query import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, TransactionQueryService, build_filter, parse_timestamp
from .repository import TransactionRepository
from .service import TransferService
from .summary import SummaryService

__all__ = [
    "CommissionRunReport",
    "CommissionService",
    "CurrencyMismatchError",
    "DEFAULT_PAGE_SIZE",
    "DuplicateReferenceError",
    "FeePolicy",
    "InsufficientFundsError",
    "MAX_PAGE_SIZE",
    "MONEY_PLACES",
    "Page",
    "SUCCESS_MESSAGE",
    "SameAccountError",
    "SummaryService",
    "Transaction",
    "TransactionError",
    "TransactionFilter",
    "TransactionQueryService",
    "TransactionRepository",
    "TransactionStatus",
    "TransactionSummary",
    "TransferExecutionError",
    "TransferRejectedError",
    "TransferRequest",
    "TransferResult",
    "TransferService",
    "ValidationFailureError",
    "build_filter",
    "calculate_fee",
    "has_money_scale",
    "parse_timestamp",
    "to_money",
]
