"""Account service - account lifecycle and balances."""

from datetime import date
from typing import List
from uuid import UUID

import structlog

from src.domain.entities import Account
from src.domain.exceptions import (
    AccountInUseException,
    AccountNotFoundException,
    InvalidInputException,
)
from src.domain.interfaces import AccountRepository, EntryRepository
from src.application.dto import AccountInput, AccountResponse
from src.service.ledger.projector import settled_balance

logger = structlog.get_logger(__name__)


class AccountService:
    """Application service for account use cases."""

    def __init__(
        self,
        account_repository: AccountRepository,
        entry_repository: EntryRepository,
    ):
        self._account_repo = account_repository
        self._entry_repo = entry_repository

    async def create_account(self, data: AccountInput, today: date) -> AccountResponse:
        errors = data.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        account = Account(
            name=data.name.strip(),
            type=data.type,
            initial_balance_cents=data.initial_balance_cents,
            card_closing_day=data.card_closing_day,
            card_due_day=data.card_due_day,
            card_limit_cents=data.card_limit_cents,
            active=data.active,
        )
        await self._account_repo.add(account)

        logger.info("account_created", account_id=str(account.id), type=account.type.value)

        return AccountResponse.from_entity(account, account.initial_balance_cents)

    async def update_account(
        self,
        account_id: UUID,
        data: AccountInput,
        today: date,
    ) -> AccountResponse:
        errors = data.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        account = await self._get(account_id)
        account.name = data.name.strip()
        account.type = data.type
        account.initial_balance_cents = data.initial_balance_cents
        account.card_closing_day = data.card_closing_day
        account.card_due_day = data.card_due_day
        account.card_limit_cents = data.card_limit_cents
        account.active = data.active
        await self._account_repo.update(account)

        logger.info("account_updated", account_id=str(account.id))

        return await self._with_balance(account, today)

    async def get_account(self, account_id: UUID, today: date) -> AccountResponse:
        account = await self._get(account_id)
        return await self._with_balance(account, today)

    async def list_accounts(self, today: date, include_inactive: bool = False) -> List[AccountResponse]:
        """List accounts with their current settled balance."""
        accounts = await self._account_repo.list(include_inactive=include_inactive)
        return [await self._with_balance(account, today) for account in accounts]

    async def delete_account(self, account_id: UUID) -> None:
        """
        Delete an account nothing references.

        Raises:
            AccountNotFoundException: If the account does not exist
            AccountInUseException: If entries or sales still point at it
        """
        account = await self._get(account_id)

        references = await self._account_repo.count_references(account.id)
        if references:
            logger.warning(
                "account_delete_refused",
                account_id=str(account.id),
                references=references,
            )
            raise AccountInUseException(str(account.id), references)

        await self._account_repo.delete(account.id)
        logger.info("account_deleted", account_id=str(account.id))

    async def _get(self, account_id: UUID) -> Account:
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            logger.warning("account_not_found", account_id=str(account_id))
            raise AccountNotFoundException(str(account_id))
        return account

    async def _with_balance(self, account: Account, today: date) -> AccountResponse:
        entries = await self._entry_repo.list_for_account(account.id)
        return AccountResponse.from_entity(account, settled_balance(account, entries, up_to=today))
