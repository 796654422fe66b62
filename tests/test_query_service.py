"""Tests for filtered, paginated ledger search."""

from datetime import datetime
from decimal import Decimal

import pytest

from transfer_service.domain.transactions import (
    TransactionFilter,
    TransactionQueryService,
    TransactionStatus,
    ValidationFailureError,
    build_filter,
)

ALICE = "0123456789"
BOB = "0987654321"
CAROL = "1122334455"


@pytest.fixture
async def ledger(record_transaction):
    await record_transaction("REF-1", "10", datetime(2024, 11, 1, 9, 0), source=ALICE, destination=BOB)
    await record_transaction(
        "REF-2", "20", datetime(2024, 11, 2, 9, 0), status=TransactionStatus.FAILED, source=ALICE, destination=CAROL
    )
    await record_transaction("REF-3", "30", datetime(2024, 11, 3, 9, 0), source=BOB, destination=ALICE)
    await record_transaction(
        "REF-4", "40", datetime(2024, 11, 4, 9, 0), status=TransactionStatus.INSUFFICIENT_FUND, source=CAROL, destination=BOB
    )


@pytest.mark.asyncio
async def test_search_without_filters_returns_newest_first(session, ledger):
    page = await TransactionQueryService.with_session(session).search(TransactionFilter())

    assert [t.reference for t in page.items] == ["REF-4", "REF-3", "REF-2", "REF-1"]
    assert page.total == 4
    assert page.total_pages == 1


@pytest.mark.asyncio
async def test_filters_combine(session, ledger):
    service = TransactionQueryService.with_session(session)

    by_source = await service.search(TransactionFilter(source_account_number=ALICE))
    assert {t.reference for t in by_source.items} == {"REF-1", "REF-2"}

    by_status = await service.search(TransactionFilter(status=TransactionStatus.SUCCESSFUL))
    assert {t.reference for t in by_status.items} == {"REF-1", "REF-3"}

    combined = await service.search(
        TransactionFilter(source_account_number=ALICE, destination_account_number=CAROL, status=TransactionStatus.FAILED)
    )
    assert [t.reference for t in combined.items] == ["REF-2"]
    assert combined.items[0].amount == Decimal("20")


@pytest.mark.asyncio
async def test_date_range_bounds(session, ledger):
    service = TransactionQueryService.with_session(session)

    between = await service.search(
        build_filter(start_date="2024-11-02 09:00:00", end_date="2024-11-03 09:00:00")
    )
    assert {t.reference for t in between.items} == {"REF-2", "REF-3"}

    since = await service.search(build_filter(start_date="2024-11-03 00:00:00"))
    assert {t.reference for t in since.items} == {"REF-3", "REF-4"}

    until = await service.search(build_filter(end_date="2024-11-01 23:59:59"))
    assert [t.reference for t in until.items] == ["REF-1"]


@pytest.mark.asyncio
async def test_pagination(session, ledger):
    service = TransactionQueryService.with_session(session)

    first = await service.search(TransactionFilter(), page=0, size=3)
    second = await service.search(TransactionFilter(), page=1, size=3)
    beyond = await service.search(TransactionFilter(), page=5, size=3)

    assert [t.reference for t in first.items] == ["REF-4", "REF-3", "REF-2"]
    assert [t.reference for t in second.items] == ["REF-1"]
    assert first.total_pages == 2
    assert beyond.items == []
    assert beyond.total == 4


@pytest.mark.asyncio
async def test_no_match_is_an_empty_page(session, ledger):
    page = await TransactionQueryService.with_session(session).search(
        TransactionFilter(source_account_number="5555555555")
    )

    assert page.items == []
    assert page.total == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("page,size", [(-1, 20), (0, 0), (0, 101)])
async def test_invalid_paging_is_rejected(session, page, size):
    with pytest.raises(ValidationFailureError):
        await TransactionQueryService.with_session(session).search(TransactionFilter(), page=page, size=size)


def test_build_filter_parses_values():
    filters = build_filter(
        status="SUCCESSFUL",
        source_account_number=" 0123456789 ",
        destination_account_number="",
        start_date="2024-11-01 00:00:00",
    )

    assert filters.status is TransactionStatus.SUCCESSFUL
    assert filters.source_account_number == "0123456789"
    assert filters.destination_account_number is None
    assert filters.start == datetime(2024, 11, 1)
    assert filters.end is None


@pytest.mark.parametrize("value", ["2024-11-01", "01/11/2024 10:00:00", "2024-13-01 00:00:00"])
def test_build_filter_rejects_malformed_dates(value):
    with pytest.raises(ValidationFailureError):
        build_filter(start_date=value)


def test_build_filter_rejects_unknown_status():
    with pytest.raises(ValidationFailureError):
        build_filter(status="PENDING")
