"""Account, statement and card invoice API endpoints."""

import calendar
from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.application.dto import AccountInput, PayInvoiceInput
from src.application.services import AccountService, CardService, StatementService
from src.core.dependencies import (
    Today,
    get_account_service,
    get_card_service,
    get_statement_service,
)
from src.core.metrics import record_invoice_payment
from src.domain.entities import DisplayStatus, EntryKind
from src.domain.exceptions import InvalidInputException
from src.service.ledger import StatementFilters
from src.presentation.schemas import (
    AccountRequestSchema,
    AccountResponseSchema,
    CardSummaryResponseSchema,
    ErrorResponseSchema,
    InvoicePaymentResponseSchema,
    InvoiceResponseSchema,
    PayInvoiceRequestSchema,
    StatementResponseSchema,
)

account_router = APIRouter(
    prefix="/accounts",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Account not found"},
    },
)

Accounts = Annotated[AccountService, Depends(get_account_service)]
Statements = Annotated[StatementService, Depends(get_statement_service)]
Cards = Annotated[CardService, Depends(get_card_service)]


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM reference month."""
    try:
        year, month = (int(part) for part in value.split("-"))
        date(year, month, 1)
    except ValueError:
        raise InvalidInputException(f"Invalid month, expected YYYY-MM: {value!r}") from None
    return year, month


async def statement_params(
    today: Today,
    date_from: Annotated[Optional[date], Query(description="Defaults to the first day of the month")] = None,
    date_to: Annotated[Optional[date], Query(description="Defaults to the last day of the month")] = None,
    status: Annotated[list[DisplayStatus], Query()] = [],
    kind: Annotated[list[EntryKind], Query()] = [],
    category_id: Annotated[list[UUID], Query()] = [],
    q: Annotated[Optional[str], Query(max_length=255)] = None,
) -> tuple[date, date, StatementFilters]:
    """Statement range and display filters; filters never change the balances."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    range_from = date_from or today.replace(day=1)
    range_to = date_to or today.replace(day=last_day)
    filters = StatementFilters(
        statuses=frozenset(status),
        kinds=frozenset(kind),
        category_ids=frozenset(category_id),
        query=q,
    )
    return range_from, range_to, filters


StatementParams = Annotated[tuple, Depends(statement_params)]


def _account_input(request: AccountRequestSchema) -> AccountInput:
    return AccountInput(
        name=request.name,
        type=request.type,
        initial_balance_cents=request.initial_balance_cents,
        card_closing_day=request.card_closing_day,
        card_due_day=request.card_due_day,
        card_limit_cents=request.card_limit_cents,
        active=request.active,
    )


@account_router.get(
    "",
    response_model=list[AccountResponseSchema],
    summary="List Accounts",
)
async def list_accounts(
    service: Accounts,
    today: Today,
    include_inactive: bool = False,
) -> list[AccountResponseSchema]:
    accounts = await service.list_accounts(today, include_inactive=include_inactive)
    return [AccountResponseSchema.model_validate(a) for a in accounts]


@account_router.post(
    "",
    response_model=AccountResponseSchema,
    status_code=201,
    summary="Create Account",
)
async def create_account(
    request: AccountRequestSchema,
    service: Accounts,
    today: Today,
) -> AccountResponseSchema:
    account = await service.create_account(_account_input(request), today)
    return AccountResponseSchema.model_validate(account)


@account_router.get("/{account_id}", response_model=AccountResponseSchema, summary="Get Account")
async def get_account(account_id: UUID, service: Accounts, today: Today) -> AccountResponseSchema:
    return AccountResponseSchema.model_validate(await service.get_account(account_id, today))


@account_router.put("/{account_id}", response_model=AccountResponseSchema, summary="Update Account")
async def update_account(
    account_id: UUID,
    request: AccountRequestSchema,
    service: Accounts,
    today: Today,
) -> AccountResponseSchema:
    account = await service.update_account(account_id, _account_input(request), today)
    return AccountResponseSchema.model_validate(account)


@account_router.delete(
    "/{account_id}",
    status_code=204,
    summary="Delete Account",
    responses={409: {"model": ErrorResponseSchema, "description": "Account still referenced"}},
)
async def delete_account(account_id: UUID, service: Accounts) -> Response:
    await service.delete_account(account_id)
    return Response(status_code=204)


@account_router.get(
    "/{account_id}/statement",
    response_model=StatementResponseSchema,
    summary="Account Statement",
    description="""
    Opening, current and projected balances with period inflow/outflow and
    a running-balance row list, most recent first.

    Display filters only select rows; every balance uses the full period.
    """,
)
async def get_statement(
    account_id: UUID,
    params: StatementParams,
    service: Statements,
    today: Today,
) -> StatementResponseSchema:
    range_from, range_to, filters = params
    statement = await service.get_statement(account_id, range_from, range_to, today, filters)
    return StatementResponseSchema.model_validate(statement)


@account_router.get(
    "/{account_id}/statement.csv",
    summary="Export Statement as CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_statement(
    account_id: UUID,
    params: StatementParams,
    service: Statements,
    today: Today,
) -> Response:
    range_from, range_to, filters = params
    content = await service.export_csv(account_id, range_from, range_to, today, filters)
    filename = f"statement-{account_id}-{range_from.isoformat()}-{range_to.isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@account_router.get(
    "/{account_id}/invoice",
    response_model=InvoiceResponseSchema,
    summary="Card Invoice",
)
async def get_invoice(
    account_id: UUID,
    month: Annotated[str, Query(description="Reference month, YYYY-MM", examples=["2025-10"])],
    service: Cards,
    today: Today,
) -> InvoiceResponseSchema:
    year, month_number = parse_month(month)
    invoice = await service.get_invoice(account_id, year, month_number, today)
    return InvoiceResponseSchema.model_validate(invoice)


@account_router.post(
    "/{account_id}/invoice/pay",
    response_model=InvoicePaymentResponseSchema,
    status_code=201,
    summary="Pay Card Invoice",
    description="""
    Book the invoice payment on a bank or cash account and settle every
    open expense of the invoice under one settlement group.
    """,
)
async def pay_invoice(
    account_id: UUID,
    request: PayInvoiceRequestSchema,
    service: Cards,
    today: Today,
) -> InvoicePaymentResponseSchema:
    year, month_number = parse_month(request.month)
    result = await service.pay_invoice(
        account_id,
        PayInvoiceInput(
            source_account_id=request.source_account_id,
            year=year,
            month=month_number,
            payment_date=request.payment_date,
            amount_cents=request.amount_cents,
        ),
        today,
    )
    record_invoice_payment()
    return InvoicePaymentResponseSchema.model_validate(result)


@account_router.get(
    "/{account_id}/card-summary",
    response_model=CardSummaryResponseSchema,
    summary="Card Limit Summary",
)
async def get_card_summary(account_id: UUID, service: Cards, today: Today) -> CardSummaryResponseSchema:
    return CardSummaryResponseSchema.model_validate(await service.get_summary(account_id, today))
