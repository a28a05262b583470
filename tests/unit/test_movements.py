"""
Unit Tests for server-side movement listing.

These tests verify:
1. Filters (text, kind, display status, account, dates)
2. Newest-first sort and pagination
3. Company-wide and single-account totals
"""

import pytest
from datetime import date
from uuid import uuid4

from src.domain.entities import DisplayStatus, EntryKind, EntryStatus, LedgerEntry
from src.domain.exceptions import InvalidInputException, InvalidRangeException
from src.service.ledger.movements import MovementQuery, company_value, query_movements
from src.service.ledger.settings import LedgerSettings

TODAY = date(2024, 3, 15)
BANK = uuid4()
CASH = uuid4()


def entry(description: str, kind: EntryKind, gross: int, due: date, paid: date | None = None, **kwargs):
    return LedgerEntry(
        description=description,
        kind=kind,
        account_id=kwargs.pop("account_id", BANK),
        due_date=due,
        paid_date=paid,
        status=EntryStatus.SETTLED if paid else kwargs.pop("status", EntryStatus.OPEN),
        gross_cents=gross,
        **kwargs,
    )


@pytest.fixture
def entries():
    return [
        entry("Customer payment", EntryKind.INCOME, 5000, date(2024, 3, 1), paid=date(2024, 3, 2)),
        entry("Rent", EntryKind.EXPENSE, 2000, date(2024, 3, 10)),
        entry("Internet", EntryKind.EXPENSE, 300, TODAY),
        entry(
            "Move to cash",
            EntryKind.TRANSFER,
            700,
            date(2024, 3, 5),
            paid=date(2024, 3, 5),
            destination_account_id=CASH,
        ),
        entry("Old fee", EntryKind.EXPENSE, 100, date(2024, 3, 3), status=EntryStatus.CANCELLED),
        entry("Next month sale", EntryKind.INCOME, 1000, date(2024, 4, 10), account_id=CASH),
    ]


class TestFilters:
    """Tests for movement filters."""

    def test_text_search_is_case_insensitive(self, entries):
        page = query_movements(entries, MovementQuery(q="RENT"), TODAY)

        assert [e.description for e in page.items] == ["Rent"]

    def test_overdue_status_filter(self, entries):
        page = query_movements(
            entries,
            MovementQuery(statuses=frozenset({DisplayStatus.OVERDUE})),
            TODAY,
        )

        assert [e.description for e in page.items] == ["Rent"]

    def test_account_filter_matches_destination(self, entries):
        page = query_movements(entries, MovementQuery(account_ids=frozenset({CASH})), TODAY)

        assert {e.description for e in page.items} == {"Move to cash", "Next month sale"}

    def test_date_range_on_effective_date(self, entries):
        page = query_movements(
            entries,
            MovementQuery(date_from=date(2024, 3, 2), date_to=date(2024, 3, 5)),
            TODAY,
        )

        assert [e.description for e in page.items] == ["Move to cash", "Old fee", "Customer payment"]

    def test_inverted_range_is_rejected(self, entries):
        with pytest.raises(InvalidRangeException):
            query_movements(entries, MovementQuery(date_from=TODAY, date_to=date(2024, 1, 1)), TODAY)


class TestPagination:
    """Tests for sort order and paging."""

    def test_newest_first(self, entries):
        page = query_movements(entries, MovementQuery(), TODAY)

        dates = [e.effective_date for e in page.items]
        assert dates == sorted(dates, reverse=True)
        assert page.total == 6
        assert page.page_size == 50

    def test_second_page(self, entries):
        page = query_movements(entries, MovementQuery(page=2, page_size=4), TODAY)

        assert page.total == 6
        assert len(page.items) == 2

    def test_page_size_bounds(self, entries):
        with pytest.raises(InvalidInputException):
            query_movements(entries, MovementQuery(page_size=501), TODAY)
        with pytest.raises(InvalidInputException):
            query_movements(entries, MovementQuery(page=0), TODAY)

    def test_custom_default_page_size(self, entries):
        settings = LedgerSettings(default_page_size=2)

        page = query_movements(entries, MovementQuery(), TODAY, settings)

        assert len(page.items) == 2


class TestTotals:
    """Totals cover the whole filtered set."""

    def test_company_wide_totals_ignore_transfers(self, entries):
        page = query_movements(entries, MovementQuery(page_size=1, with_totals=True), TODAY)

        totals = page.totals
        assert totals.inflow_cents == 5000
        assert totals.outflow_cents == 0
        assert totals.pending_today_cents == -300
        assert totals.projected_balance_cents == 5000 - 2000 - 300 + 1000
        assert totals.net_cents == 5000

    def test_single_account_totals_are_account_relative(self, entries):
        page = query_movements(
            entries,
            MovementQuery(account_ids=frozenset({BANK}), with_totals=True),
            TODAY,
        )

        assert page.totals.inflow_cents == 5000
        assert page.totals.outflow_cents == -700
        assert page.totals.projected_balance_cents == 5000 - 2000 - 300 - 700

    def test_totals_absent_unless_requested(self, entries):
        assert query_movements(entries, MovementQuery(), TODAY).totals is None

    def test_company_value(self):
        income = entry("x", EntryKind.INCOME, 100, TODAY)
        transfer = entry("y", EntryKind.TRANSFER, 100, TODAY, destination_account_id=CASH)

        assert company_value(income) == 100
        assert company_value(transfer) == 0
