"""Movement (ledger entry) API endpoints."""

from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from src.application.dto import BulkActionInput, EntryInput, SettleInput
from src.application.services import MovementService
from src.core.dependencies import Today, get_movement_service
from src.domain.entities import DisplayStatus, EntryKind
from src.service.ledger import MovementQuery
from src.presentation.schemas import (
    BulkActionRequestSchema,
    BulkActionResponseSchema,
    EntryRequestSchema,
    EntryResponseSchema,
    ErrorResponseSchema,
    MovementPageSchema,
    RevertResponseSchema,
    SettleRequestSchema,
)

movement_router = APIRouter(
    prefix="/movements",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Entry or account not found"},
        409: {"model": ErrorResponseSchema, "description": "Transition not allowed"},
    },
)

Movements = Annotated[MovementService, Depends(get_movement_service)]


def _entry_input(request: EntryRequestSchema) -> EntryInput:
    return EntryInput(
        description=request.description,
        kind=request.kind,
        account_id=request.account_id,
        due_date=request.due_date,
        gross_cents=request.gross_cents,
        fees_cents=request.fees_cents,
        interest_cents=request.interest_cents,
        destination_account_id=request.destination_account_id,
        category_id=request.category_id,
        contact_id=request.contact_id,
        transaction_date=request.transaction_date,
        notes=request.notes,
        settled=request.settled,
        paid_date=request.paid_date,
    )


@movement_router.get(
    "",
    response_model=MovementPageSchema,
    summary="List Movements",
    description="""
    Filter, sort (effective date, newest first) and paginate entries.

    With `with_totals`, inflow/outflow/pending/projected totals cover the
    whole filtered set, not just the page.
    """,
)
async def list_movements(
    service: Movements,
    today: Today,
    q: Annotated[Optional[str], Query(max_length=255, description="Description contains")] = None,
    kind: Annotated[list[EntryKind], Query()] = [],
    status: Annotated[list[DisplayStatus], Query()] = [],
    account_id: Annotated[list[UUID], Query()] = [],
    category_id: Annotated[list[UUID], Query()] = [],
    group_id: Optional[UUID] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[Optional[int], Query(ge=1, le=500)] = None,
    with_totals: bool = False,
) -> MovementPageSchema:
    query = MovementQuery(
        q=q,
        kinds=frozenset(kind),
        statuses=frozenset(status),
        account_ids=frozenset(account_id),
        category_ids=frozenset(category_id),
        group_id=group_id,
        date_from=date_from,
        date_to=date_to,
        page=page,
        page_size=page_size,
        with_totals=with_totals,
    )
    return MovementPageSchema.model_validate(await service.list_movements(query, today))


@movement_router.post("", response_model=EntryResponseSchema, status_code=201, summary="Create Movement")
async def create_movement(
    request: EntryRequestSchema,
    service: Movements,
    today: Today,
) -> EntryResponseSchema:
    entry = await service.create_entry(_entry_input(request), today)
    return EntryResponseSchema.model_validate(entry)


@movement_router.post(
    "/bulk",
    response_model=BulkActionResponseSchema,
    summary="Bulk Settle, Revert or Delete",
    description=(
        "Entries that do not qualify are reported in `skipped`; the rest are applied. "
        "Reverting a card invoice payment reverts the expenses it settled."
    ),
)
async def bulk_action(
    request: BulkActionRequestSchema,
    service: Movements,
    today: Today,
) -> BulkActionResponseSchema:
    result = await service.bulk_action(
        BulkActionInput(action=request.action, ids=request.ids, paid_date=request.paid_date),
        today,
    )
    return BulkActionResponseSchema.model_validate(result)


@movement_router.get("/{entry_id}", response_model=EntryResponseSchema, summary="Get Movement")
async def get_movement(entry_id: UUID, service: Movements, today: Today) -> EntryResponseSchema:
    return EntryResponseSchema.model_validate(await service.get_entry(entry_id, today))


@movement_router.put("/{entry_id}", response_model=EntryResponseSchema, summary="Update Open Movement")
async def update_movement(
    entry_id: UUID,
    request: EntryRequestSchema,
    service: Movements,
    today: Today,
) -> EntryResponseSchema:
    entry = await service.update_entry(entry_id, _entry_input(request), request.version, today)
    return EntryResponseSchema.model_validate(entry)


@movement_router.delete("/{entry_id}", status_code=204, summary="Delete Movement")
async def delete_movement(entry_id: UUID, service: Movements) -> Response:
    await service.delete_entry(entry_id)
    return Response(status_code=204)


@movement_router.post("/{entry_id}/settle", response_model=EntryResponseSchema, summary="Settle Movement")
async def settle_movement(
    entry_id: UUID,
    request: SettleRequestSchema,
    service: Movements,
    today: Today,
) -> EntryResponseSchema:
    """
    Settle an open entry on `paid_date`.

    Sale-linked entries also accept the final product value and freight;
    the sale is then marked as payment received.
    """
    entry = await service.settle_entry(
        entry_id,
        SettleInput(
            paid_date=request.paid_date,
            fees_cents=request.fees_cents,
            interest_cents=request.interest_cents,
            product_value_cents=request.product_value_cents,
            freight_cents=request.freight_cents,
        ),
        today,
    )
    return EntryResponseSchema.model_validate(entry)


@movement_router.post(
    "/{entry_id}/revert",
    response_model=RevertResponseSchema,
    summary="Revert Settled Movement",
    description="""
    Return a settled entry to open.

    Reverting a card invoice payment reverts every expense it settled, or
    nothing at all when any of them cannot be reverted.
    """,
)
async def revert_movement(entry_id: UUID, service: Movements, today: Today) -> RevertResponseSchema:
    reverted = await service.revert_entry(entry_id, today)
    return RevertResponseSchema(
        reverted=[EntryResponseSchema.model_validate(e) for e in reverted],
    )


@movement_router.post("/{entry_id}/cancel", response_model=EntryResponseSchema, summary="Cancel Movement")
async def cancel_movement(entry_id: UUID, service: Movements, today: Today) -> EntryResponseSchema:
    return EntryResponseSchema.model_validate(await service.cancel_entry(entry_id, today))
