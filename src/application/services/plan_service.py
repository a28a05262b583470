"""Plan service - installment and recurrence preview and confirmation."""

from datetime import date
from uuid import UUID

import structlog

from src.domain.entities import Frequency, InstallmentPlan, PlanKind
from src.domain.exceptions import (
    AccountNotFoundException,
    EntryNotFoundException,
    InvalidInputException,
)
from src.domain.interfaces import AccountRepository, EntryRepository
from src.application.dto import (
    EntryResponse,
    PlanConfirmInput,
    PlanGroupResponse,
    PlanInput,
    PlanPreviewResponse,
)
from src.service.ledger import (
    entry_template,
    generate_plan,
    generate_recurrence,
    materialize_plan,
)

logger = structlog.get_logger(__name__)


class PlanService:
    """
    Application service for installment plans.

    Previews are pure; confirmation writes one entry per plan item, all
    sharing a group id.
    """

    def __init__(
        self,
        entry_repository: EntryRepository,
        account_repository: AccountRepository,
    ):
        self._entry_repo = entry_repository
        self._account_repo = account_repository

    def build_plan(self, data: PlanInput) -> InstallmentPlan:
        """
        Run the planner for raw plan parameters.

        Raises:
            InvalidInputException: On any invalid parameter
        """
        frequency = Frequency.parse(data.frequency, data.n_days)

        if data.kind == PlanKind.INSTALLMENT:
            if data.interest_cents:
                raise InvalidInputException("Installment plans do not carry interest")
            return generate_plan(
                total_gross_cents=data.total_gross_cents,
                total_fees_cents=data.total_fees_cents,
                count=data.count,
                frequency=frequency,
                first_due_date=data.first_due_date,
            )

        return generate_recurrence(
            gross_cents=data.total_gross_cents,
            fees_cents=data.total_fees_cents,
            count=data.count,
            first_due_date=data.first_due_date,
            frequency=frequency,
            interest_cents=data.interest_cents,
        )

    def preview(self, data: PlanInput) -> PlanPreviewResponse:
        plan = self.build_plan(data)

        logger.debug(
            "plan_previewed",
            kind=plan.kind.value,
            count=plan.count,
            total_gross_cents=plan.total_gross_cents,
        )

        return PlanPreviewResponse.from_entity(plan)

    async def confirm(self, data: PlanConfirmInput, today: date) -> PlanGroupResponse:
        """
        Materialize a plan into open entries labelled "{description} (i/count)".

        Raises:
            InvalidInputException: If the plan or entry fields are invalid
            AccountNotFoundException: If an account does not exist
        """
        if not data.description or not data.description.strip():
            raise InvalidInputException("description is required")

        plan = self.build_plan(data.plan)

        for account_id in (data.account_id, data.destination_account_id):
            if account_id is not None and await self._account_repo.get_by_id(account_id) is None:
                raise AccountNotFoundException(str(account_id))

        template = entry_template(
            description=data.description.strip(),
            kind=data.entry_kind,
            account_id=data.account_id,
            first_due_date=data.plan.first_due_date,
            destination_account_id=data.destination_account_id,
            category_id=data.category_id,
            contact_id=data.contact_id,
            interest_cents=data.plan.interest_cents,
            transaction_date=data.transaction_date,
            notes=data.notes,
        )
        entries = await self._entry_repo.add_many(materialize_plan(plan, template))
        group_id = entries[0].group_id

        logger.info(
            "plan_materialized",
            group_id=str(group_id),
            kind=plan.kind.value,
            count=len(entries),
            total_net_cents=plan.total_net_cents,
        )

        return self._group_response(group_id, entries, today)

    async def get_group(self, group_id: UUID, today: date) -> PlanGroupResponse:
        entries = [e for e in await self._entry_repo.list_by_group(group_id) if e.group_id == group_id]
        if not entries:
            raise EntryNotFoundException(f"group {group_id}")
        return self._group_response(group_id, entries, today)

    def _group_response(self, group_id: UUID, entries, today: date) -> PlanGroupResponse:
        return PlanGroupResponse(
            group_id=str(group_id),
            entries=[EntryResponse.from_entity(e, today) for e in entries],
            total_gross_cents=sum(e.gross_cents for e in entries),
            total_net_cents=sum(e.net_cents for e in entries),
        )
