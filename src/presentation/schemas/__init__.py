"""Pydantic schemas for API request/response validation."""

from .account import (
    AccountRequestSchema,
    AccountResponseSchema,
    CardSummaryResponseSchema,
    InvoicePaymentResponseSchema,
    InvoiceResponseSchema,
    PayInvoiceRequestSchema,
    StatementResponseSchema,
    StatementRowSchema,
)
from .catalog import (
    CategoryRequestSchema,
    CategoryResponseSchema,
    ContactRequestSchema,
    ContactResponseSchema,
    ProductRequestSchema,
    ProductResponseSchema,
)
from .movement import (
    BulkActionRequestSchema,
    BulkActionResponseSchema,
    EntryRequestSchema,
    EntryResponseSchema,
    MovementPageSchema,
    MovementTotalsSchema,
    RevertResponseSchema,
    SettleRequestSchema,
)
from .plan import (
    PlanConfirmRequestSchema,
    PlanGroupSchema,
    PlanItemSchema,
    PlanPreviewSchema,
    PlanRequestSchema,
)
from .stock import (
    AdjustStockRequestSchema,
    PurchaseRequestSchema,
    SaleRequestSchema,
    SaleResponseSchema,
    StockEventResponseSchema,
    StockHistoryResponseSchema,
    StockMovementSchema,
    StockResponseSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "AccountRequestSchema",
    "AccountResponseSchema",
    "CardSummaryResponseSchema",
    "InvoicePaymentResponseSchema",
    "InvoiceResponseSchema",
    "PayInvoiceRequestSchema",
    "StatementResponseSchema",
    "StatementRowSchema",
    "CategoryRequestSchema",
    "CategoryResponseSchema",
    "ContactRequestSchema",
    "ContactResponseSchema",
    "ProductRequestSchema",
    "ProductResponseSchema",
    "BulkActionRequestSchema",
    "BulkActionResponseSchema",
    "EntryRequestSchema",
    "EntryResponseSchema",
    "MovementPageSchema",
    "MovementTotalsSchema",
    "RevertResponseSchema",
    "SettleRequestSchema",
    "PlanConfirmRequestSchema",
    "PlanGroupSchema",
    "PlanItemSchema",
    "PlanPreviewSchema",
    "PlanRequestSchema",
    "AdjustStockRequestSchema",
    "PurchaseRequestSchema",
    "SaleRequestSchema",
    "SaleResponseSchema",
    "StockEventResponseSchema",
    "StockHistoryResponseSchema",
    "StockMovementSchema",
    "StockResponseSchema",
    "ErrorResponseSchema",
]
