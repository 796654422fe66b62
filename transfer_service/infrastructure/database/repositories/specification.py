"""Composable WHERE-clause builder for ledger queries."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ColumnElement

from transfer_service.domain.transactions.models import TransactionFilter, TransactionStatus
from transfer_service.infrastructure.database.models import Transaction as TransactionModel


class TransactionSpecification:
    """Accumulates predicates over ``transactions``; every predicate is ANDed.

    Soft-deleted rows are always excluded.
    """

    def __init__(self) -> None:
        self._predicates: list[ColumnElement[bool]] = [TransactionModel.deleted.is_(False)]

    @classmethod
    def from_filter(cls, filters: TransactionFilter) -> "TransactionSpecification":
        return (
            cls()
            .with_status(filters.status)
            .with_source(filters.source_account_number)
            .with_destination(filters.destination_account_number)
            .created_between(filters.start, filters.end)
        )

    def with_status(self, status: TransactionStatus | None) -> "TransactionSpecification":
        if status is not None:
            self._predicates.append(TransactionModel.status == status.value)
        return self

    def with_source(self, account_number: str | None) -> "TransactionSpecification":
        if account_number:
            self._predicates.append(TransactionModel.source_account_number == account_number)
        return self

    def with_destination(self, account_number: str | None) -> "TransactionSpecification":
        if account_number:
            self._predicates.append(TransactionModel.destination_account_number == account_number)
        return self

    def created_between(self, start: datetime | None, end: datetime | None) -> "TransactionSpecification":
        if start is not None and end is not None:
            self._predicates.append(TransactionModel.created_at.between(start, end))
        elif start is not None:
            self._predicates.append(TransactionModel.created_at >= start)
        elif end is not None:
            self._predicates.append(TransactionModel.created_at <= end)
        return self

    @property
    def predicates(self) -> tuple[ColumnElement[bool], ...]:
        return tuple(self._predicates)
