"""Installment and recurrence plan API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from src.application.dto import PlanConfirmInput, PlanInput
from src.application.services import PlanService
from src.core.dependencies import Today, get_plan_service
from src.core.metrics import record_plan
from src.presentation.schemas import (
    ErrorResponseSchema,
    PlanConfirmRequestSchema,
    PlanGroupSchema,
    PlanPreviewSchema,
    PlanRequestSchema,
)

plan_router = APIRouter(
    prefix="/plans",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid plan parameters"},
    },
)

Plans = Annotated[PlanService, Depends(get_plan_service)]


def _plan_input(request: PlanRequestSchema) -> PlanInput:
    return PlanInput(
        kind=request.kind,
        total_gross_cents=request.total_gross_cents,
        count=request.count,
        frequency=request.frequency,
        first_due_date=request.first_due_date,
        total_fees_cents=request.total_fees_cents,
        interest_cents=request.interest_cents,
        n_days=request.n_days,
    )


@plan_router.post(
    "/preview",
    response_model=PlanPreviewSchema,
    summary="Preview Plan",
    description="""
    Split a total into rounded installments (or repeat an amount) with
    their due dates. Nothing is persisted.
    """,
)
async def preview_plan(request: PlanRequestSchema, service: Plans) -> PlanPreviewSchema:
    preview = service.preview(_plan_input(request))
    record_plan(request.kind.value, "preview")
    return PlanPreviewSchema.model_validate(preview)


@plan_router.post(
    "",
    response_model=PlanGroupSchema,
    status_code=201,
    summary="Confirm Plan",
    description='Materialize the plan into open entries labelled "{description} (i/count)".',
)
async def confirm_plan(
    request: PlanConfirmRequestSchema,
    service: Plans,
    today: Today,
) -> PlanGroupSchema:
    group = await service.confirm(
        PlanConfirmInput(
            plan=_plan_input(request),
            description=request.description,
            entry_kind=request.entry_kind,
            account_id=request.account_id,
            destination_account_id=request.destination_account_id,
            category_id=request.category_id,
            contact_id=request.contact_id,
            transaction_date=request.transaction_date,
            notes=request.notes,
        ),
        today,
    )
    record_plan(request.kind.value, "confirm", items=len(group.entries))
    return PlanGroupSchema.model_validate(group)


@plan_router.get(
    "/{group_id}",
    response_model=PlanGroupSchema,
    summary="Get Plan Entries",
    responses={404: {"model": ErrorResponseSchema, "description": "Group not found"}},
)
async def get_plan_group(group_id: UUID, service: Plans, today: Today) -> PlanGroupSchema:
    return PlanGroupSchema.model_validate(await service.get_group(group_id, today))
