"""
Unit Tests for warehouse stock arithmetic, history and CSV export.
"""

import pytest
from datetime import date
from uuid import uuid4

from src.domain.entities import (
    Account,
    AccountType,
    EntryKind,
    LedgerEntry,
    Product,
    Sale,
    StockPurchase,
    WarehouseStock,
)
from src.domain.exceptions import InsufficientStockException, InvalidInputException
from src.service.ledger.export import statement_rows, to_csv
from src.service.ledger.projector import project
from src.service.ledger.stock import (
    StockMovementType,
    add_units,
    adjust_units,
    needs_reorder,
    remove_units,
    stock_history,
    unit_price_from_total,
)

PRODUCT = uuid4()
WAREHOUSE = uuid4()


def make_purchase(when: date, quantity: int) -> StockPurchase:
    return StockPurchase(
        product_id=PRODUCT,
        warehouse_id=WAREHOUSE,
        quantity=quantity,
        unit_cost_cents=500,
        purchase_date=when,
    )


def make_sale(when: date, quantity: int) -> Sale:
    return Sale(
        product_id=PRODUCT,
        warehouse_id=WAREHOUSE,
        quantity=quantity,
        unit_price_cents=900,
        sale_date=when,
        credit_account_id=uuid4(),
        expected_payment_date=when,
    )


# =============================================================================
# Stock Arithmetic
# =============================================================================

class TestStockArithmetic:
    """Tests for add/remove/adjust."""

    def test_add_and_remove(self):
        stock = WarehouseStock(product_id=PRODUCT, warehouse_id=WAREHOUSE)

        stock = add_units(stock, 10)
        stock = remove_units(stock, 4)

        assert stock.quantity == 6

    def test_remove_more_than_held(self):
        stock = WarehouseStock(product_id=PRODUCT, warehouse_id=WAREHOUSE, quantity=3)

        with pytest.raises(InsufficientStockException) as exc_info:
            remove_units(stock, 4)

        assert exc_info.value.available == 3
        assert exc_info.value.requested == 4

    def test_quantities_must_be_positive(self):
        stock = WarehouseStock(product_id=PRODUCT, warehouse_id=WAREHOUSE)

        with pytest.raises(InvalidInputException):
            add_units(stock, 0)

    def test_adjust_sets_quantity(self):
        stock = WarehouseStock(product_id=PRODUCT, warehouse_id=WAREHOUSE, quantity=3)

        adjusted = adjust_units(stock, 7, "inventory count")

        assert adjusted.quantity == 7
        assert adjusted.adjustment_reason == "inventory count"

    def test_adjust_rejects_negative(self):
        with pytest.raises(InvalidInputException):
            adjust_units(WarehouseStock(product_id=PRODUCT, warehouse_id=WAREHOUSE), -1)

    def test_needs_reorder_at_minimum(self):
        product = Product(name="Mug", min_stock=5)

        assert needs_reorder(WarehouseStock(PRODUCT, WAREHOUSE, quantity=5), product)
        assert not needs_reorder(WarehouseStock(PRODUCT, WAREHOUSE, quantity=6), product)

    def test_unit_price_rounds_half_up(self):
        assert unit_price_from_total(1000, 3) == 333
        assert unit_price_from_total(1001, 2) == 501


# =============================================================================
# Stock History
# =============================================================================

class TestStockHistory:
    """Tests for the running-quantity history."""

    def test_history_running_balance_latest_first(self):
        purchases = [make_purchase(date(2024, 3, 1), 10), make_purchase(date(2024, 3, 10), 5)]
        sales = [make_sale(date(2024, 3, 5), 4)]

        history = stock_history(purchases, sales)

        assert [m.date for m in history] == [date(2024, 3, 10), date(2024, 3, 5), date(2024, 3, 1)]
        assert [m.balance for m in history] == [11, 6, 10]
        assert history[1].type == StockMovementType.EXIT

    def test_purchase_first_on_same_day(self):
        history = stock_history([make_purchase(date(2024, 3, 1), 2)], [make_sale(date(2024, 3, 1), 2)])

        assert [m.type for m in reversed(history)] == [StockMovementType.ENTRY, StockMovementType.EXIT]
        assert history[0].balance == 0

    def test_empty_history(self):
        assert stock_history([], []) == []


# =============================================================================
# CSV Export
# =============================================================================

class TestCsvExport:
    """Tests for to_csv and statement_rows."""

    def test_csv_quotes_every_field(self):
        rows = [{"a": "x", "b": 'say "hi"'}, {"a": None, "b": 3}]

        assert to_csv(rows) == '"a","b"\n"x","say ""hi"""\n"","3"\n'

    def test_csv_empty(self):
        assert to_csv([]) == ""

    def test_statement_rows_latest_first(self):
        bank = Account(name="Bank", type=AccountType.BANK, initial_balance_cents=10000)
        entries = [
            LedgerEntry(
                description="Sale",
                kind=EntryKind.INCOME,
                account_id=bank.id,
                due_date=date(2024, 3, 1),
                gross_cents=2550,
            ),
            LedgerEntry(
                description="Rent",
                kind=EntryKind.EXPENSE,
                account_id=bank.id,
                due_date=date(2024, 3, 20),
                gross_cents=1000,
            ),
        ]
        statement = project(bank, entries, date(2024, 3, 1), date(2024, 3, 31), date(2024, 3, 10))

        rows = statement_rows(statement)

        assert rows[0] == {
            "date": "2024-03-20",
            "description": "Rent",
            "kind": "expense",
            "status": "open",
            "value": "-10.00",
            "running_balance": "115.50",
        }
        assert rows[1]["status"] == "overdue"
        assert rows[1]["running_balance"] == "125.50"
