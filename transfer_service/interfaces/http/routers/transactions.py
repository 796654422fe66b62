"""Transfer, ledger search and summary endpoints."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from transfer_service.core.clock import DATE_FORMAT, today_in_zone
from transfer_service.core.config import Settings, get_settings
from transfer_service.domain.transactions import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SummaryService,
    TransactionQueryService,
    TransactionStatus,
    TransferService,
    ValidationFailureError,
    build_filter,
)
from transfer_service.interfaces.http.deps import get_query_service, get_summary_service, get_transfer_service
from transfer_service.schemas import (
    ApiResponse,
    PageResponse,
    SummaryResponse,
    TransactionResponse,
    TransferRequestIn,
    page_response,
    transfer_response,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/transfer", response_model=ApiResponse[TransactionResponse], summary="Transfer funds between accounts")
async def transfer(
    payload: TransferRequestIn,
    service: TransferService = Depends(get_transfer_service),
) -> ApiResponse[TransactionResponse]:
    logger.info("Transfer request received: %s", payload.model_dump())
    result = await service.process_transfer(payload.to_domain())
    return transfer_response(result)


@router.get("", response_model=ApiResponse[PageResponse[TransactionResponse]], summary="Search the transaction ledger")
async def list_transactions(
    status: Optional[TransactionStatus] = Query(default=None),
    source_account_number: Optional[str] = Query(
        default=None, alias="sourceAccountNumber", min_length=10, max_length=20
    ),
    destination_account_number: Optional[str] = Query(
        default=None, alias="destinationAccountNumber", min_length=10, max_length=20
    ),
    start_date: Optional[str] = Query(default=None, alias="startDate", description="yyyy-MM-dd HH:mm:ss"),
    end_date: Optional[str] = Query(default=None, alias="endDate", description="yyyy-MM-dd HH:mm:ss"),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: TransactionQueryService = Depends(get_query_service),
) -> ApiResponse[PageResponse[TransactionResponse]]:
    logger.info(
        "Transaction search request: status=%s, sourceAccountNumber=%s, destinationAccountNumber=%s, startDate=%s, endDate=%s",
        status.value if status else None,
        source_account_number,
        destination_account_number,
        start_date,
        end_date,
    )
    filters = build_filter(
        status=status,
        source_account_number=source_account_number,
        destination_account_number=destination_account_number,
        start_date=start_date,
        end_date=end_date,
    )
    result = await service.search(filters, page=page, size=size)
    return ApiResponse[PageResponse[TransactionResponse]].ok(page_response(result), "Transactions fetched successfully")


@router.get("/summary", response_model=ApiResponse[SummaryResponse], summary="Daily transaction summary")
async def daily_summary(
    day: Optional[str] = Query(default=None, alias="date", description="yyyy-MM-dd"),
    service: SummaryService = Depends(get_summary_service),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[SummaryResponse]:
    target = _parse_day(day) if day else today_in_zone(settings.timezone)
    logger.info("Daily summary request: date=%s", target)

    summary = await service.daily_summary(target)
    return ApiResponse[SummaryResponse].ok(SummaryResponse.from_domain(summary), "Transaction summary generated")


def _parse_day(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationFailureError("date must use the format yyyy-MM-dd") from exc
