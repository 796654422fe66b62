"""SQLAlchemy implementation of the transaction ledger."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from transfer_service.domain.common.repository import AsyncRepository
from transfer_service.domain.transactions.exceptions import DuplicateReferenceError
from transfer_service.domain.transactions.models import Page, Transaction, TransactionFilter, TransactionStatus
from transfer_service.domain.transactions.repository import TransactionRepository
from transfer_service.infrastructure.database.models import Transaction as TransactionModel

from .specification import TransactionSpecification


class SqlTransactionRepository(AsyncRepository[TransactionModel], TransactionRepository):
    async def exists(self, reference: str) -> bool:
        stmt = select(TransactionModel.id).where(TransactionModel.reference == reference).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_by_reference(self, reference: str) -> Transaction | None:
        model = await self._load(reference)
        return self._to_domain(model) if model is not None else None

    async def save(self, transaction: Transaction) -> Transaction:
        if transaction.status is None:
            raise ValueError("Only transactions with a terminal status can be recorded")
        model = TransactionModel(
            reference=transaction.reference,
            amount=transaction.amount,
            fee=transaction.fee,
            billed_amount=transaction.billed_amount,
            currency=transaction.currency,
            description=transaction.description,
            created_at=transaction.created_at,
            status=transaction.status.value,
            status_message=transaction.status_message,
            commission_worthy=transaction.commission_worthy,
            commission=transaction.commission,
            source_account_number=transaction.source_account_number,
            destination_account_number=transaction.destination_account_number,
        )
        try:
            await self.add(model)
        except IntegrityError as exc:
            if "reference" in str(exc.orig).lower():
                raise DuplicateReferenceError(transaction.reference) from exc
            raise
        transaction.id = model.id
        return transaction

    async def update_commission(self, reference: str, commission: Decimal) -> Transaction | None:
        model = await self._load(reference)
        if model is None:
            return None
        model.commission_worthy = True
        model.commission = commission
        await self.session.flush()
        return self._to_domain(model)

    async def soft_delete(self, reference: str) -> bool:
        stmt = (
            update(TransactionModel)
            .where(TransactionModel.reference == reference, TransactionModel.deleted.is_(False))
            .values(deleted=True)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def find_by_status_between(
        self,
        status: TransactionStatus,
        start: datetime,
        end: datetime,
    ) -> Sequence[Transaction]:
        spec = TransactionSpecification().with_status(status).created_between(start, end)
        return await self._find(spec)

    async def find_between(self, start: datetime, end: datetime) -> Sequence[Transaction]:
        return await self._find(TransactionSpecification().created_between(start, end))

    async def search(self, filters: TransactionFilter, page: int, size: int) -> Page[Transaction]:
        predicates = TransactionSpecification.from_filter(filters).predicates

        count_stmt = select(func.count()).select_from(TransactionModel).where(*predicates)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(TransactionModel)
            .where(*predicates)
            .order_by(TransactionModel.created_at.desc(), TransactionModel.id.desc())
            .offset(page * size)
            .limit(size)
        )
        result = await self.session.execute(stmt)
        items = [self._to_domain(model) for model in result.scalars().all()]
        return Page(items=items, page=page, size=size, total=total)

    async def _find(self, spec: TransactionSpecification) -> list[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(*spec.predicates)
            .order_by(TransactionModel.created_at, TransactionModel.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def _load(self, reference: str) -> TransactionModel | None:
        stmt = select(TransactionModel).where(
            TransactionModel.reference == reference,
            TransactionModel.deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            reference=model.reference,
            amount=Decimal(model.amount),
            fee=Decimal(model.fee),
            billed_amount=Decimal(model.billed_amount),
            currency=model.currency,
            description=model.description,
            created_at=model.created_at,
            status=TransactionStatus(model.status),
            status_message=model.status_message,
            commission_worthy=bool(model.commission_worthy),
            commission=Decimal(model.commission) if model.commission is not None else None,
            source_account_number=model.source_account_number,
            destination_account_number=model.destination_account_number,
        )
