"""
Ledger core: pure computations over accounts and ledger entries.

Nothing in this package performs I/O or reads the clock; callers pass
`today` explicitly.
"""

from .settings import LedgerSettings, ledger_settings
from .money import format_money, split_rounded, to_cents
from .schedule import add_months, step_date
from .planner import entry_template, generate_plan, generate_recurrence, materialize_plan
from .projector import Statement, StatementFilters, StatementRow, effective_value, project
from .transitions import (
    InvoicePayment,
    cancel,
    pay_card_invoice,
    revert,
    revert_cascade,
    revert_many,
    settle,
)
from .invoice import CardInvoice, CardSummary, card_summary, invoice_for
from .movements import MovementPage, MovementQuery, MovementTotals, query_movements
from .stock import StockMovement, StockMovementType, stock_history
from .export import statement_rows, to_csv

__all__ = [
    "LedgerSettings",
    "ledger_settings",
    "format_money",
    "split_rounded",
    "to_cents",
    "add_months",
    "step_date",
    "entry_template",
    "generate_plan",
    "generate_recurrence",
    "materialize_plan",
    "Statement",
    "StatementFilters",
    "StatementRow",
    "effective_value",
    "project",
    "InvoicePayment",
    "cancel",
    "pay_card_invoice",
    "revert",
    "revert_cascade",
    "revert_many",
    "settle",
    "CardInvoice",
    "CardSummary",
    "card_summary",
    "invoice_for",
    "MovementPage",
    "MovementQuery",
    "MovementTotals",
    "query_movements",
    "StockMovement",
    "StockMovementType",
    "stock_history",
    "statement_rows",
    "to_csv",
]
