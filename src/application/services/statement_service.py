"""Statement service - account statements and their CSV export."""

from datetime import date
from uuid import UUID

import structlog

from src.domain.exceptions import AccountNotFoundException
from src.domain.interfaces import AccountRepository, EntryRepository
from src.application.dto import StatementResponse
from src.core.metrics import track_statement_latency
from src.service.ledger import Statement, StatementFilters, project, statement_rows, to_csv

logger = structlog.get_logger(__name__)


class StatementService:
    """
    Application service for account statements.

    Loads the account and every entry touching it, then delegates all
    balance math to the projector.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        entry_repository: EntryRepository,
    ):
        self._account_repo = account_repository
        self._entry_repo = entry_repository

    async def project_account(
        self,
        account_id: UUID,
        range_from: date,
        range_to: date,
        today: date,
        filters: StatementFilters | None = None,
    ) -> Statement:
        """
        Raises:
            AccountNotFoundException: If the account does not exist
            InvalidRangeException: If range_from > range_to
        """
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundException(str(account_id))

        entries = await self._entry_repo.list_for_account(account.id)
        with track_statement_latency():
            statement = project(account, entries, range_from, range_to, today, filters)

        logger.info(
            "statement_projected",
            account_id=str(account_id),
            range_from=range_from.isoformat(),
            range_to=range_to.isoformat(),
            rows=len(statement.rows),
        )
        return statement

    async def get_statement(
        self,
        account_id: UUID,
        range_from: date,
        range_to: date,
        today: date,
        filters: StatementFilters | None = None,
    ) -> StatementResponse:
        statement = await self.project_account(account_id, range_from, range_to, today, filters)
        return StatementResponse.from_statement(statement)

    async def export_csv(
        self,
        account_id: UUID,
        range_from: date,
        range_to: date,
        today: date,
        filters: StatementFilters | None = None,
    ) -> str:
        statement = await self.project_account(account_id, range_from, range_to, today, filters)
        return to_csv(statement_rows(statement))
