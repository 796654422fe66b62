"""Pydantic schemas used by the HTTP interface."""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from transfer_service.core.clock import DATETIME_FORMAT
from transfer_service.domain.transactions.models import (
    Page,
    Transaction,
    TransactionStatus,
    TransactionSummary,
    TransferRequest,
    TransferResult,
)

T = TypeVar("T")

Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Timestamp = Annotated[
    datetime,
    PlainSerializer(lambda value: value.strftime(DATETIME_FORMAT), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransferRequestIn(CamelModel):
    reference: str = Field(..., min_length=1, max_length=64)
    amount: Decimal = Field(..., gt=0, max_digits=24, decimal_places=8)
    currency: str = Field(..., pattern=r"^[A-Z]{3}$")
    description: Optional[str] = Field(default=None, max_length=255)
    source_account_number: str = Field(..., min_length=10, max_length=20)
    destination_account_number: str = Field(..., min_length=10, max_length=20)

    def to_domain(self) -> TransferRequest:
        return TransferRequest(
            reference=self.reference.strip(),
            amount=self.amount,
            currency=self.currency,
            description=self.description,
            source_account_number=self.source_account_number,
            destination_account_number=self.destination_account_number,
        )


class TransactionResponse(CamelModel):
    reference: str
    amount: Amount
    fee: Amount
    billed_amount: Amount
    currency: str
    description: Optional[str] = None
    created_at: Timestamp
    status: TransactionStatus
    status_message: Optional[str] = None
    commission_worthy: bool = False
    commission: Optional[Amount] = None
    source_account_number: str
    destination_account_number: str

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            reference=transaction.reference,
            amount=transaction.amount,
            fee=transaction.fee,
            billed_amount=transaction.billed_amount,
            currency=transaction.currency,
            description=transaction.description,
            created_at=transaction.created_at,
            status=transaction.status,
            status_message=transaction.status_message,
            commission_worthy=transaction.commission_worthy,
            commission=transaction.commission,
            source_account_number=transaction.source_account_number,
            destination_account_number=transaction.destination_account_number,
        )


class SummaryResponse(CamelModel):
    start_date: Timestamp
    end_date: Timestamp
    total_transactions: int
    successful_transactions: int
    failed_transactions: int
    insufficient_fund_transactions: int
    total_amount: Amount
    total_commission: Amount

    @classmethod
    def from_domain(cls, summary: TransactionSummary) -> "SummaryResponse":
        return cls(
            start_date=summary.start,
            end_date=summary.end,
            total_transactions=summary.total_transactions,
            successful_transactions=summary.successful_transactions,
            failed_transactions=summary.failed_transactions,
            insufficient_fund_transactions=summary.insufficient_fund_transactions,
            total_amount=summary.total_amount,
            total_commission=summary.total_commission,
        )


class PageResponse(CamelModel, Generic[T]):
    content: list[T] = Field(default_factory=list)
    page: int
    size: int
    total_elements: int
    total_pages: int


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    error_code: Optional[str] = None
    data: Optional[T] = None

    @classmethod
    def ok(cls, data: T, message: str = "Successful") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str, error_code: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, error_code=error_code)


def transfer_response(result: TransferResult) -> ApiResponse[TransactionResponse]:
    return ApiResponse[TransactionResponse](
        success=result.success,
        message=result.message,
        error_code=result.error_code,
        data=TransactionResponse.from_domain(result.transaction),
    )


def page_response(page: Page[Transaction]) -> PageResponse[TransactionResponse]:
    return PageResponse[TransactionResponse](
        content=[TransactionResponse.from_domain(item) for item in page.items],
        page=page.page,
        size=page.size,
        total_elements=page.total,
        total_pages=page.total_pages,
    )


class HealthResponse(BaseModel):
    status: str
    version: str
