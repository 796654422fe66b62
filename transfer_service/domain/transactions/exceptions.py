"""Transfer and ledger specific exceptions."""

from __future__ import annotations

from .models import TransactionStatus


class TransactionError(Exception):
    """Base class for ledger and transfer errors."""

    code = "TRANSACTION_ERROR"


class ValidationFailureError(TransactionError):
    """Raised for malformed input rejected before the engine runs."""

    code = "VALIDATION_FAILURE"


class TransferRejectedError(TransactionError):
    """A business rule rejected the transfer; becomes a terminal ledger entry."""

    code = "TRANSFER_REJECTED"
    status = TransactionStatus.FAILED


class SameAccountError(TransferRejectedError):
    code = "SAME_ACCOUNT"

    def __init__(self) -> None:
        super().__init__("Source and destination accounts cannot be the same")


class CurrencyMismatchError(TransferRejectedError):
    code = "CURRENCY_MISMATCH"

    def __init__(self, side: str, account_currency: str, requested_currency: str) -> None:
        super().__init__(f"Currency mismatch detected for {side} account")
        self.side = side
        self.account_currency = account_currency
        self.requested_currency = requested_currency


class InsufficientFundsError(TransferRejectedError):
    code = "INSUFFICIENT_FUNDS"
    status = TransactionStatus.INSUFFICIENT_FUND

    def __init__(self) -> None:
        super().__init__("Insufficient funds in source account")


class DuplicateReferenceError(TransactionError):
    """Raised when a reference already exists in the ledger."""

    code = "DUPLICATE_REFERENCE"

    def __init__(self, reference: str) -> None:
        super().__init__(f"Transaction reference already exists: {reference}")
        self.reference = reference


class TransferExecutionError(TransactionError):
    """Unexpected failure while moving money or persisting the ledger."""

    code = "TRANSFER_EXECUTION_FAILURE"
    default_message = "An error occurred during transaction processing"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
