"""Transaction related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from transfer_service.core.config import Settings, get_settings
from transfer_service.domain.transactions import SummaryService, TransactionQueryService, TransferService

from .database import get_db_session


def get_transfer_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> TransferService:
    return TransferService.with_session(db, settings)


def get_query_service(db: AsyncSession = Depends(get_db_session)) -> TransactionQueryService:
    return TransactionQueryService.with_session(db)


def get_summary_service(db: AsyncSession = Depends(get_db_session)) -> SummaryService:
    return SummaryService.with_session(db)


__all__ = [
    "get_query_service",
    "get_summary_service",
    "get_transfer_service",
]
