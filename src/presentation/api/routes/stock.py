"""Warehouse stock API endpoints."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.dto import PurchaseInput, SaleInput
from src.application.services import StockService
from src.core.dependencies import get_stock_service
from src.presentation.schemas import (
    AdjustStockRequestSchema,
    ErrorResponseSchema,
    PurchaseRequestSchema,
    SaleRequestSchema,
    SaleResponseSchema,
    StockEventResponseSchema,
    StockHistoryResponseSchema,
    StockResponseSchema,
)

stock_router = APIRouter(
    prefix="/stock",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Product, warehouse or account not found"},
    },
)

Stock = Annotated[StockService, Depends(get_stock_service)]


@stock_router.get("", response_model=list[StockResponseSchema], summary="List Stock")
async def list_stock(
    service: Stock,
    warehouse_id: Optional[UUID] = None,
    reorder_only: Annotated[
        bool,
        Query(description="Only rows at or below the product's minimum stock"),
    ] = False,
) -> list[StockResponseSchema]:
    rows = await service.list_stock(warehouse_id=warehouse_id, reorder_only=reorder_only)
    return [StockResponseSchema.model_validate(r) for r in rows]


@stock_router.post(
    "/purchases",
    response_model=StockEventResponseSchema,
    status_code=201,
    summary="Record Purchase",
    description="Add units to a warehouse and book the matching expense.",
)
async def record_purchase(request: PurchaseRequestSchema, service: Stock) -> StockEventResponseSchema:
    result = await service.record_purchase(PurchaseInput(**request.model_dump()))
    return StockEventResponseSchema.model_validate(result)


@stock_router.post(
    "/sales",
    response_model=StockEventResponseSchema,
    status_code=201,
    summary="Record Sale",
    description="Remove units from a warehouse and book the receivable on the credit account.",
    responses={409: {"model": ErrorResponseSchema, "description": "Insufficient stock"}},
)
async def record_sale(request: SaleRequestSchema, service: Stock) -> StockEventResponseSchema:
    result = await service.record_sale(SaleInput(**request.model_dump()))
    return StockEventResponseSchema.model_validate(result)


@stock_router.get("/sales/{sale_id}", response_model=SaleResponseSchema, summary="Get Sale")
async def get_sale(sale_id: UUID, service: Stock) -> SaleResponseSchema:
    return SaleResponseSchema.model_validate(await service.get_sale(sale_id))


@stock_router.get(
    "/history",
    response_model=StockHistoryResponseSchema,
    summary="Stock History",
    description="Purchases and sales with a running quantity, most recent first.",
)
async def get_history(
    product_id: UUID,
    warehouse_id: UUID,
    service: Stock,
) -> StockHistoryResponseSchema:
    history = await service.get_history(product_id, warehouse_id)
    return StockHistoryResponseSchema.model_validate(history)


@stock_router.put("/{stock_id}", response_model=StockResponseSchema, summary="Adjust Stock")
async def adjust_stock(
    stock_id: UUID,
    request: AdjustStockRequestSchema,
    service: Stock,
) -> StockResponseSchema:
    stock = await service.adjust_stock(stock_id, request.quantity, request.reason)
    return StockResponseSchema.model_validate(stock)
