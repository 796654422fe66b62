"""Transfer engine: validation pipeline, debit/credit and ledger persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from transfer_service.core.clock import now_in_zone
from transfer_service.core.config import Settings
from transfer_service.domain.accounts.exceptions import AccountNotFoundError, BalanceTooLowError
from transfer_service.domain.accounts.locks import AccountLockRegistry, account_locks
from transfer_service.domain.accounts.models import Account
from transfer_service.domain.accounts.service import AccountService
from transfer_service.domain.common.unit_of_work import UnitOfWork

from .exceptions import (
    CurrencyMismatchError,
    DuplicateReferenceError,
    InsufficientFundsError,
    SameAccountError,
    TransferExecutionError,
    TransferRejectedError,
    ValidationFailureError,
)
from .fees import MONEY_PLACES, FeePolicy, has_money_scale
from .models import SUCCESS_MESSAGE, Transaction, TransactionStatus, TransferRequest, TransferResult
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransferService:
    accounts: AccountService
    ledger: TransactionRepository
    unit_of_work: UnitOfWork
    fees: FeePolicy
    clock: Callable[[], datetime]
    locks: AccountLockRegistry = field(default=account_locks)

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings) -> "TransferService":
        from transfer_service.infrastructure.database.repositories import (
            SqlTransactionRepository,
            SqlUnitOfWork,
        )

        zone = settings.timezone
        return cls(
            accounts=AccountService.with_session(session),
            ledger=SqlTransactionRepository(session),
            unit_of_work=SqlUnitOfWork(session),
            fees=FeePolicy.from_settings(settings.fees),
            clock=lambda: now_in_zone(zone),
        )

    async def process_transfer(self, request: TransferRequest) -> TransferResult:
        """Move ``request.amount`` between two accounts and record exactly one ledger entry.

        Business rule failures come back as a non-success :class:`TransferResult`.
        Only an amount that is not a positive money value
        (:class:`ValidationFailureError`), a duplicate reference
        (:class:`DuplicateReferenceError`) or an infrastructure fault
        (:class:`TransferExecutionError`) is raised.
        """
        logger.info(
            "Starting transfer process. Source Account = %s, Destination Account = %s, Reference = %s",
            request.source_account_number,
            request.destination_account_number,
            request.reference,
        )
        if request.amount <= 0 or not has_money_scale(request.amount):
            raise ValidationFailureError(
                f"amount must be greater than zero with at most {MONEY_PLACES} decimal places"
            )

        async with self.locks.hold(request.source_account_number, request.destination_account_number):
            if await self.ledger.exists(request.reference):
                logger.warning("Rejected duplicate transaction reference: %s", request.reference)
                raise DuplicateReferenceError(request.reference)

            transaction = self._build_transaction(request)
            logger.info("Transaction initialized: %s", transaction)

            try:
                source = await self.accounts.account_enquiry(request.source_account_number)
                self._log_account(source, "Source")
                destination = await self.accounts.account_enquiry(request.destination_account_number)
                self._log_account(destination, "Destination")
                self._validate(request, source, destination, transaction)
            except (AccountNotFoundError, TransferRejectedError) as exc:
                return await self._reject(transaction, exc)

            try:
                transaction = await self._execute(transaction, source, destination)
            except DuplicateReferenceError:
                await self.unit_of_work.rollback()
                raise
            except BalanceTooLowError:
                # Another writer drained the account between the check and the debit.
                await self.unit_of_work.rollback()
                return await self._reject(transaction, InsufficientFundsError())
            except Exception:
                logger.exception("Error during transfer process for Reference: %s", request.reference)
                await self.unit_of_work.rollback()
                return await self._reject(transaction, TransferExecutionError())

        logger.info(
            "Transaction completed successfully. Source Account = %s, Reference = %s",
            request.source_account_number,
            request.reference,
        )
        return TransferResult.succeeded(transaction)

    def _build_transaction(self, request: TransferRequest) -> Transaction:
        fee = self.fees.fee_for(request.amount)
        return Transaction(
            reference=request.reference,
            amount=request.amount,
            fee=fee,
            billed_amount=self.fees.billed_amount(request.amount, fee),
            currency=request.currency,
            source_account_number=request.source_account_number,
            destination_account_number=request.destination_account_number,
            description=request.description,
            created_at=self.clock(),
        )

    @staticmethod
    def _log_account(account: Account, account_type: str) -> None:
        logger.info(
            "%s Account: %s, Balance: %s, Currency: %s",
            account_type,
            account.account_number,
            account.balance,
            account.currency,
        )

    @staticmethod
    def _validate(
        request: TransferRequest,
        source: Account,
        destination: Account,
        transaction: Transaction,
    ) -> None:
        if source.account_number == destination.account_number:
            logger.warning(
                "Validation failed: Source and destination accounts are the same. Account = %s",
                source.account_number,
            )
            raise SameAccountError()

        for side, account in (("source", source), ("destination", destination)):
            if account.currency != request.currency:
                logger.warning(
                    "Validation failed: Currency mismatch for %s Account = %s, Expected = %s, Provided = %s",
                    side,
                    account.account_number,
                    account.currency,
                    request.currency,
                )
                raise CurrencyMismatchError(side, account.currency, request.currency)

        if source.balance < transaction.billed_amount:
            logger.warning(
                "Validation failed: Insufficient funds for Source Account = %s, Balance = %s, Required = %s",
                source.account_number,
                source.balance,
                transaction.billed_amount,
            )
            raise InsufficientFundsError()

    async def _execute(self, transaction: Transaction, source: Account, destination: Account) -> Transaction:
        logger.info("Debiting Source Account: %s, Amount: %s", source.account_number, transaction.billed_amount)
        await self.accounts.debit_account(source, transaction.billed_amount)

        logger.info("Crediting Destination Account: %s, Amount: %s", destination.account_number, transaction.amount)
        await self.accounts.credit_account(destination, transaction.amount)

        completed = replace(transaction, status=TransactionStatus.SUCCESSFUL, status_message=SUCCESS_MESSAGE)
        await self.ledger.save(completed)
        await self.unit_of_work.commit()
        return completed

    async def _reject(self, transaction: Transaction, error: Exception) -> TransferResult:
        status = getattr(error, "status", TransactionStatus.FAILED)
        code = getattr(error, "code", TransferExecutionError.code)
        message = str(error)

        transaction.mark(status, message)
        try:
            await self.ledger.save(transaction)
            await self.unit_of_work.commit()
        except DuplicateReferenceError:
            await self.unit_of_work.rollback()
            raise
        except Exception as exc:
            logger.exception("Failed to persist ledger entry for Reference: %s", transaction.reference)
            await self.unit_of_work.rollback()
            raise TransferExecutionError("Unable to record transaction") from exc

        logger.info(
            "Transaction failed. Status = %s, Message = %s, Reference = %s",
            status.value,
            message,
            transaction.reference,
        )
        return TransferResult.failed(transaction, code)
