"""Account domain exports."""

from .exceptions import (
    AccountAlreadyExistsError,
    AccountError,
    AccountNotFoundError,
    BalanceTooLowError,
    StaleBalanceError,
)
from .locks import AccountLockRegistry, account_locks
from .models import Account, AccountCreateInput, AccountStatus
from .service import AccountService

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountStatus",
    "AccountService",
    "AccountLockRegistry",
    "account_locks",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "BalanceTooLowError",
    "StaleBalanceError",
]
