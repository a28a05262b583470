"""PostgreSQL repository implementation for accounts."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Account, AccountType
from src.domain.exceptions import AccountNotFoundException
from src.domain.interfaces import AccountRepository
from src.infrastructure.database.models import AccountModel, EntryModel, SaleModel


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL-backed account repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, account: Account) -> Account:
        model = AccountModel(id=str(account.id), created_at=account.created_at)
        self._apply(model, account)
        self._session.add(model)
        await self._session.flush()

        return account

    async def update(self, account: Account) -> Account:
        model = await self._session.get(AccountModel, str(account.id))
        if model is None:
            raise AccountNotFoundException(str(account.id))

        self._apply(model, account)
        await self._session.flush()

        return account

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        stmt = select(AccountModel).where(AccountModel.id == str(account_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def list(self, include_inactive: bool = False) -> List[Account]:
        stmt = select(AccountModel).order_by(AccountModel.name)
        if not include_inactive:
            stmt = stmt.where(AccountModel.active.is_(True))

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, account_id: UUID) -> None:
        await self._session.execute(
            delete(AccountModel).where(AccountModel.id == str(account_id))
        )

    async def count_references(self, account_id: UUID) -> int:
        key = str(account_id)
        entries = await self._session.scalar(
            select(func.count())
            .select_from(EntryModel)
            .where(or_(EntryModel.account_id == key, EntryModel.destination_account_id == key))
        )
        sales = await self._session.scalar(
            select(func.count())
            .select_from(SaleModel)
            .where(SaleModel.credit_account_id == key)
        )
        return (entries or 0) + (sales or 0)

    def _apply(self, model: AccountModel, account: Account) -> None:
        model.name = account.name
        model.type = account.type.value
        model.initial_balance_cents = account.initial_balance_cents
        model.card_closing_day = account.card_closing_day
        model.card_due_day = account.card_due_day
        model.card_limit_cents = account.card_limit_cents
        model.active = account.active

    def _to_entity(self, model: AccountModel) -> Account:
        return Account(
            id=UUID(str(model.id)),
            name=model.name,
            type=AccountType(model.type),
            initial_balance_cents=model.initial_balance_cents,
            card_closing_day=model.card_closing_day,
            card_due_day=model.card_due_day,
            card_limit_cents=model.card_limit_cents,
            active=model.active,
            created_at=model.created_at,
        )
