"""Data Transfer Objects for application layer."""

from .entry import (
    BulkActionInput,
    BulkActionResult,
    EntryInput,
    EntryResponse,
    MovementPageResponse,
    MovementTotalsDTO,
    SettleInput,
)
from .plan import (
    PlanConfirmInput,
    PlanGroupResponse,
    PlanInput,
    PlanItemDTO,
    PlanPreviewResponse,
)
from .account import (
    AccountInput,
    AccountResponse,
    CardSummaryResponse,
    InvoicePaymentResponse,
    InvoiceResponse,
    PayInvoiceInput,
    StatementResponse,
    StatementRowDTO,
)
from .stock import (
    PurchaseInput,
    SaleInput,
    SaleResponse,
    StockEventResponse,
    StockHistoryResponse,
    StockMovementDTO,
    StockResponse,
)

__all__ = [
    "BulkActionInput",
    "BulkActionResult",
    "EntryInput",
    "EntryResponse",
    "MovementPageResponse",
    "MovementTotalsDTO",
    "SettleInput",
    "PlanConfirmInput",
    "PlanGroupResponse",
    "PlanInput",
    "PlanItemDTO",
    "PlanPreviewResponse",
    "AccountInput",
    "AccountResponse",
    "CardSummaryResponse",
    "InvoicePaymentResponse",
    "InvoiceResponse",
    "PayInvoiceInput",
    "StatementResponse",
    "StatementRowDTO",
    "PurchaseInput",
    "SaleInput",
    "SaleResponse",
    "StockEventResponse",
    "StockHistoryResponse",
    "StockMovementDTO",
    "StockResponse",
]
