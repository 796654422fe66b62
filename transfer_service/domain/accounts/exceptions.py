"""Account domain specific exceptions."""

from __future__ import annotations

from decimal import Decimal


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when attempting to create an account with a duplicate number."""


class AccountNotFoundError(AccountError):
    """Raised when no active account matches the requested number."""

    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_number: str) -> None:
        super().__init__(f"No active account found with number: {account_number}")
        self.account_number = account_number


class BalanceTooLowError(AccountError):
    """Raised by a debit that would take the balance below zero."""

    def __init__(self, account_number: str, amount: Decimal) -> None:
        super().__init__(f"Balance of {account_number} cannot cover {amount}")
        self.account_number = account_number
        self.amount = amount


class StaleBalanceError(AccountError):
    """Raised when the stored balance changed between read and write."""

    def __init__(self, account_number: str) -> None:
        super().__init__(f"Balance of {account_number} was modified concurrently")
        self.account_number = account_number
