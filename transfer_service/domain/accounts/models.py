"""Domain models for accounts."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


class AccountStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    CLOSED = "CLOSED"


@dataclass(slots=True)
class Account:
    account_number: str
    account_name: str
    balance: Decimal
    currency: str
    status: AccountStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class AccountCreateInput:
    account_number: str
    account_name: str
    currency: str
    balance: Decimal = Decimal("0")
    status: AccountStatus = AccountStatus.ACTIVE
