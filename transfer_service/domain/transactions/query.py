"""Filtered, paginated views over the ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from transfer_service.core.clock import DATETIME_FORMAT

from .exceptions import ValidationFailureError
from .models import Page, Transaction, TransactionFilter, TransactionStatus
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def parse_timestamp(value: Optional[str], field_name: str) -> Optional[datetime]:
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), DATETIME_FORMAT)
    except ValueError as exc:
        raise ValidationFailureError(f"{field_name} must use the format yyyy-MM-dd HH:mm:ss") from exc


def build_filter(
    *,
    status: Optional[str | TransactionStatus] = None,
    source_account_number: Optional[str] = None,
    destination_account_number: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> TransactionFilter:
    """Turn raw query parameters into a :class:`TransactionFilter`; blank values are ignored."""
    resolved_status: Optional[TransactionStatus] = None
    if isinstance(status, TransactionStatus):
        resolved_status = status
    elif status is not None and status.strip():
        try:
            resolved_status = TransactionStatus(status.strip())
        except ValueError as exc:
            raise ValidationFailureError(
                "Invalid status. Allowed values: SUCCESSFUL, INSUFFICIENT_FUND, FAILED"
            ) from exc

    return TransactionFilter(
        status=resolved_status,
        source_account_number=(source_account_number or "").strip() or None,
        destination_account_number=(destination_account_number or "").strip() or None,
        start=parse_timestamp(start_date, "startDate"),
        end=parse_timestamp(end_date, "endDate"),
    )


@dataclass(slots=True)
class TransactionQueryService:
    repository: TransactionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionQueryService":
        from transfer_service.infrastructure.database.repositories import SqlTransactionRepository

        return cls(SqlTransactionRepository(session))

    async def search(
        self,
        filters: TransactionFilter,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[Transaction]:
        if page < 0:
            raise ValidationFailureError("page must not be negative")
        if size < 1 or size > MAX_PAGE_SIZE:
            raise ValidationFailureError(f"size must be between 1 and {MAX_PAGE_SIZE}")

        result = await self.repository.search(filters, page, size)
        if not result.items:
            logger.info(
                "No transactions found for the given filters: Status=%s, SourceAccount=%s, DestinationAccount=%s, StartDate=%s, EndDate=%s",
                filters.status.value if filters.status else None,
                filters.source_account_number,
                filters.destination_account_number,
                filters.start,
                filters.end,
            )
        logger.info("Fetched %s transactions for the given filters.", len(result.items))
        return result
