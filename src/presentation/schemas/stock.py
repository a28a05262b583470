"""Warehouse stock Pydantic schemas."""

import datetime
from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PurchaseRequestSchema(BaseModel):
    """Schema for POST /api/stock/purchases request body."""

    product_id: UUID
    warehouse_id: UUID
    quantity: int = Field(..., gt=0)
    unit_cost_cents: int = Field(..., ge=0)
    purchase_date: date
    payment_account_id: UUID
    due_date: Optional[date] = Field(None, description="Defaults to the purchase date")
    supplier_id: Optional[UUID] = None
    category_id: Optional[UUID] = None


class SaleRequestSchema(BaseModel):
    """Schema for POST /api/stock/sales request body."""

    product_id: UUID
    warehouse_id: UUID
    quantity: int = Field(..., gt=0)
    unit_price_cents: int = Field(..., ge=0)
    sale_date: date
    credit_account_id: UUID
    expected_payment_date: date
    customer_id: Optional[UUID] = None
    freight_cents: int = Field(0, ge=0)
    tax_cents: int = Field(0, ge=0)
    discount_cents: int = Field(0, ge=0)
    category_id: Optional[UUID] = None

    @model_validator(mode="after")
    def validate_payment_date(self) -> "SaleRequestSchema":
        if self.expected_payment_date < self.sale_date:
            raise ValueError("expected_payment_date cannot precede sale_date")
        return self


class AdjustStockRequestSchema(BaseModel):
    quantity: int = Field(..., ge=0)
    reason: Optional[str] = Field(None, max_length=255)


class StockResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stock_id: str
    product_id: str
    product_name: Optional[str]
    warehouse_id: str
    quantity: int
    min_stock: int
    needs_reorder: bool
    adjustment_reason: Optional[str]


class StockEventResponseSchema(BaseModel):
    """Result of a purchase or sale: the event id, its ledger entry and the new stock."""

    model_config = ConfigDict(from_attributes=True)

    event_id: str
    entry_id: str
    stock: StockResponseSchema


class StockMovementSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime.date
    type: str = Field(..., description="entry (purchase) or exit (sale)")
    quantity: int
    balance: int = Field(..., description="Running quantity after this movement")
    unit_value_cents: int
    reference_id: str
    counterparty_id: Optional[str]


class StockHistoryResponseSchema(BaseModel):
    """Schema for GET /api/stock/history response; movements most recent first."""

    model_config = ConfigDict(from_attributes=True)

    product_id: str
    warehouse_id: str
    current_quantity: int
    movements: list[StockMovementSchema]


class SaleResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sale_id: str
    status: str
    quantity: int
    unit_price_cents: int
    freight_cents: int
    tax_cents: int
    gross_cents: int
    entry_id: Optional[str]
