"""Tests for the transfer engine."""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from transfer_service.domain.accounts import AccountStatus
from transfer_service.domain.transactions import (
    SUCCESS_MESSAGE,
    DuplicateReferenceError,
    TransactionStatus,
    TransferExecutionError,
    TransferRequest,
    ValidationFailureError,
)
from transfer_service.infrastructure.database.repositories import SqlTransactionRepository

from .conftest import FIXED_NOW

SOURCE = "0123456789"
DESTINATION = "0987654321"


def _request(reference="REF-0001", amount="5.00", currency="NGN", source=SOURCE, destination=DESTINATION):
    return TransferRequest(
        reference=reference,
        amount=Decimal(amount),
        currency=currency,
        source_account_number=source,
        destination_account_number=destination,
        description="school fees",
    )


async def _ledger_entry(session_factory, reference):
    async with session_factory() as session:
        return await SqlTransactionRepository(session).get_by_reference(reference)


@pytest.mark.asyncio
async def test_successful_transfer_moves_amount_and_charges_fee(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.success is True
    assert result.message == SUCCESS_MESSAGE
    assert result.error_code is None
    assert result.transaction.status is TransactionStatus.SUCCESSFUL
    assert result.transaction.fee == Decimal("0.025")
    assert result.transaction.billed_amount == Decimal("5.025")
    assert result.transaction.created_at == FIXED_NOW

    assert await fetch_balance(SOURCE) == Decimal("994.975")
    assert await fetch_balance(DESTINATION) == Decimal("5.00")

    entry = await _ledger_entry(session_factory, "REF-0001")
    assert entry.status is TransactionStatus.SUCCESSFUL
    assert entry.status_message == SUCCESS_MESSAGE
    assert entry.billed_amount == entry.amount + entry.fee
    assert entry.commission_worthy is False
    assert entry.commission is None


@pytest.mark.asyncio
async def test_currency_mismatch_is_recorded_as_failed(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000", currency="NGN")
    await create_account(DESTINATION, "0", currency="NGN")

    result = await make_transfer_service(session).process_transfer(_request(currency="USD"))

    assert result.success is False
    assert result.error_code == "CURRENCY_MISMATCH"
    assert result.message == "Currency mismatch detected for source account"
    assert await fetch_balance(SOURCE) == Decimal("1000")
    assert await fetch_balance(DESTINATION) == Decimal("0")

    entry = await _ledger_entry(session_factory, "REF-0001")
    assert entry.status is TransactionStatus.FAILED


@pytest.mark.asyncio
async def test_destination_currency_mismatch_names_destination(
    session, make_transfer_service, create_account
):
    await create_account(SOURCE, "1000", currency="NGN")
    await create_account(DESTINATION, "0", currency="USD")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.message == "Currency mismatch detected for destination account"


@pytest.mark.asyncio
async def test_insufficient_funds_leaves_balances_unchanged(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "3.00")
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.success is False
    assert result.error_code == "INSUFFICIENT_FUNDS"
    assert result.transaction.status is TransactionStatus.INSUFFICIENT_FUND
    assert result.transaction.billed_amount == Decimal("5.025")
    assert await fetch_balance(SOURCE) == Decimal("3.00")
    assert await fetch_balance(DESTINATION) == Decimal("0")

    entry = await _ledger_entry(session_factory, "REF-0001")
    assert entry.status is TransactionStatus.INSUFFICIENT_FUND
    assert entry.status_message == "Insufficient funds in source account"


@pytest.mark.asyncio
async def test_balance_equal_to_billed_amount_is_enough(
    session, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "5.025")
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.success is True
    assert await fetch_balance(SOURCE) == Decimal("0")


@pytest.mark.asyncio
async def test_same_account_is_rejected(session, session_factory, make_transfer_service, create_account, fetch_balance):
    await create_account(SOURCE, "1000")

    result = await make_transfer_service(session).process_transfer(_request(destination=SOURCE))

    assert result.success is False
    assert result.error_code == "SAME_ACCOUNT"
    assert result.message == "Source and destination accounts cannot be the same"
    assert await fetch_balance(SOURCE) == Decimal("1000")
    assert (await _ledger_entry(session_factory, "REF-0001")).status is TransactionStatus.FAILED


@pytest.mark.asyncio
async def test_unknown_account_is_recorded_as_failed(session, session_factory, make_transfer_service, create_account):
    await create_account(SOURCE, "1000")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.success is False
    assert result.error_code == "ACCOUNT_NOT_FOUND"
    assert result.message == f"No active account found with number: {DESTINATION}"
    assert (await _ledger_entry(session_factory, "REF-0001")).status is TransactionStatus.FAILED


@pytest.mark.asyncio
async def test_inactive_account_is_not_found(session, make_transfer_service, create_account, fetch_balance):
    await create_account(SOURCE, "1000", status=AccountStatus.INACTIVE)
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request())

    assert result.error_code == "ACCOUNT_NOT_FOUND"
    assert await fetch_balance(SOURCE) == Decimal("1000")


@pytest.mark.asyncio
async def test_duplicate_reference_is_raised_and_not_applied_twice(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")
    service = make_transfer_service(session)

    first = await service.process_transfer(_request())
    assert first.success is True

    with pytest.raises(DuplicateReferenceError):
        await service.process_transfer(_request())

    assert await fetch_balance(SOURCE) == Decimal("994.975")
    assert await fetch_balance(DESTINATION) == Decimal("5.00")


@pytest.mark.asyncio
async def test_duplicate_of_a_failed_reference_is_also_rejected(session, make_transfer_service, create_account):
    await create_account(SOURCE, "1.00")
    await create_account(DESTINATION, "0")
    service = make_transfer_service(session)

    first = await service.process_transfer(_request())
    assert first.transaction.status is TransactionStatus.INSUFFICIENT_FUND

    with pytest.raises(DuplicateReferenceError):
        await service.process_transfer(_request())


@pytest.mark.asyncio
async def test_failure_during_credit_rolls_back_debit(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")
    service = make_transfer_service(session)
    service.accounts.credit_account = AsyncMock(side_effect=RuntimeError("connection reset"))

    result = await service.process_transfer(_request())

    assert result.success is False
    assert result.error_code == "TRANSFER_EXECUTION_FAILURE"
    assert result.message == "An error occurred during transaction processing"
    assert await fetch_balance(SOURCE) == Decimal("1000")
    assert await fetch_balance(DESTINATION) == Decimal("0")
    assert (await _ledger_entry(session_factory, "REF-0001")).status is TransactionStatus.FAILED


@pytest.mark.asyncio
async def test_concurrent_transfers_cannot_overdraw(
    session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "10")
    await create_account(DESTINATION, "0")

    async def transfer(reference):
        async with session_factory() as session:
            return await make_transfer_service(session).process_transfer(_request(reference=reference, amount="6"))

    results = await asyncio.gather(transfer("REF-A"), transfer("REF-B"))

    statuses = sorted(result.transaction.status.value for result in results)
    assert statuses == ["INSUFFICIENT_FUND", "SUCCESSFUL"]
    assert await fetch_balance(SOURCE) == Decimal("3.97")
    assert await fetch_balance(DESTINATION) == Decimal("6")


@pytest.mark.asyncio
async def test_large_balance_is_debited_exactly(session, make_transfer_service, create_account, fetch_balance):
    await create_account(SOURCE, "123456789012.34")
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request(amount="0.01"))

    assert result.transaction.billed_amount == Decimal("0.01005")
    assert await fetch_balance(SOURCE) == Decimal("123456789012.32995")
    assert await fetch_balance(DESTINATION) == Decimal("0.01")


@pytest.mark.asyncio
async def test_repeated_small_transfers_do_not_drift(session_factory, make_transfer_service, create_account, fetch_balance):
    await create_account(SOURCE, "100000000")
    await create_account(DESTINATION, "0")

    for index in range(20):
        async with session_factory() as session:
            result = await make_transfer_service(session).process_transfer(
                _request(reference=f"REF-{index:04d}", amount="0.01")
            )
        assert result.success is True

    assert await fetch_balance(SOURCE) == Decimal("99999999.799")
    assert await fetch_balance(DESTINATION) == Decimal("0.20")


@pytest.mark.asyncio
async def test_stored_entry_matches_returned_amounts(session, session_factory, make_transfer_service, create_account):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")

    result = await make_transfer_service(session).process_transfer(_request(amount="1.12345679"))

    entry = await _ledger_entry(session_factory, "REF-0001")
    assert result.transaction.fee == Decimal("0.00561728")
    assert result.transaction.billed_amount == Decimal("1.12907407")
    assert (entry.amount, entry.fee, entry.billed_amount) == (
        result.transaction.amount,
        result.transaction.fee,
        result.transaction.billed_amount,
    )


@pytest.mark.asyncio
async def test_amount_beyond_eight_decimal_places_is_invalid(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")

    with pytest.raises(ValidationFailureError):
        await make_transfer_service(session).process_transfer(_request(amount="1.123456789"))

    assert await fetch_balance(SOURCE) == Decimal("1000")
    assert await _ledger_entry(session_factory, "REF-0001") is None


@pytest.mark.asyncio
async def test_duplicate_reference_caught_at_insert_rolls_back_transfer(
    session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "1000")
    await create_account(DESTINATION, "0")
    await create_account("1111111111", "1000")
    await create_account("2222222222", "0")

    async with session_factory() as session:
        first = await make_transfer_service(session).process_transfer(_request())
    assert first.success is True

    async with session_factory() as session:
        service = make_transfer_service(session)
        service.ledger.exists = AsyncMock(return_value=False)
        with pytest.raises(DuplicateReferenceError):
            await service.process_transfer(_request(source="1111111111", destination="2222222222"))

    assert await fetch_balance("1111111111") == Decimal("1000")
    assert await fetch_balance("2222222222") == Decimal("0")
    assert (await _ledger_entry(session_factory, "REF-0001")).source_account_number == SOURCE


@pytest.mark.asyncio
async def test_concurrent_duplicate_reference_on_disjoint_accounts(
    session_factory, make_transfer_service, create_account, fetch_balance
):
    pairs = {SOURCE: DESTINATION, "1111111111": "2222222222"}
    for source, destination in pairs.items():
        await create_account(source, "1000")
        await create_account(destination, "0")

    async def transfer(source, destination):
        async with session_factory() as session:
            return await make_transfer_service(session).process_transfer(
                _request(reference="REF-SHARED", source=source, destination=destination)
            )

    results = await asyncio.gather(
        *(transfer(source, destination) for source, destination in pairs.items()),
        return_exceptions=True,
    )

    winners = [result for result in results if not isinstance(result, BaseException)]
    losers = [result for result in results if isinstance(result, BaseException)]
    assert len(winners) == 1 and winners[0].success is True
    assert len(losers) == 1 and isinstance(losers[0], DuplicateReferenceError)

    winning_source = winners[0].transaction.source_account_number
    losing_source = next(source for source in pairs if source != winning_source)
    assert await fetch_balance(winning_source) == Decimal("994.975")
    assert await fetch_balance(pairs[winning_source]) == Decimal("5.00")
    assert await fetch_balance(losing_source) == Decimal("1000")
    assert await fetch_balance(pairs[losing_source]) == Decimal("0")
    assert (await _ledger_entry(session_factory, "REF-SHARED")).source_account_number == winning_source


@pytest.mark.asyncio
async def test_failure_to_record_rejection_raises_execution_error(
    session, session_factory, make_transfer_service, create_account, fetch_balance
):
    await create_account(SOURCE, "3.00")
    await create_account(DESTINATION, "0")
    service = make_transfer_service(session)
    service.ledger.save = AsyncMock(side_effect=RuntimeError("disk I/O error"))

    with pytest.raises(TransferExecutionError):
        await service.process_transfer(_request())

    assert await fetch_balance(SOURCE) == Decimal("3.00")
    assert await _ledger_entry(session_factory, "REF-0001") is None
