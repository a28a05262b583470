"""PostgreSQL repository implementation for ledger entries."""

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.domain.entities import (
    EntryKind,
    EntryOrigin,
    EntryStatus,
    LedgerEntry,
    OriginType,
)
from src.domain.exceptions import ConcurrentModificationException, EntryNotFoundException
from src.domain.interfaces import EntryRepository
from src.infrastructure.database.models import EntryModel


def _str(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


def _uuid(value: str | None) -> UUID | None:
    return UUID(str(value)) if value is not None else None


class PostgresEntryRepository(EntryRepository):
    """PostgreSQL-backed ledger entry repository with optimistic locking."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add_many(self, entries: Sequence[LedgerEntry]) -> List[LedgerEntry]:
        models = []
        for entry in entries:
            model = EntryModel(id=str(entry.id), created_at=entry.created_at)
            self._apply(model, entry)
            models.append(model)

        self._session.add_all(models)
        await self._session.flush()

        return [self._to_entity(model) for model in models]

    async def update_many(self, entries: Sequence[LedgerEntry]) -> List[LedgerEntry]:
        if not entries:
            return []

        stmt = select(EntryModel).where(EntryModel.id.in_([str(e.id) for e in entries]))
        result = await self._session.execute(stmt)
        models = {UUID(str(m.id)): m for m in result.scalars().all()}

        now = datetime.now(timezone.utc)
        for entry in entries:
            model = models.get(entry.id)
            if model is None:
                raise EntryNotFoundException(str(entry.id))
            if model.version != entry.version:
                raise ConcurrentModificationException(str(entry.id))
            self._apply(model, entry)
            model.updated_at = now

        try:
            await self._session.flush()
        except StaleDataError as exc:
            raise ConcurrentModificationException(
                ", ".join(str(e.id) for e in entries)
            ) from exc

        return [self._to_entity(models[entry.id]) for entry in entries]

    async def get_by_id(self, entry_id: UUID) -> Optional[LedgerEntry]:
        stmt = select(EntryModel).where(EntryModel.id == str(entry_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_many(self, entry_ids: Iterable[UUID]) -> List[LedgerEntry]:
        ids = [str(entry_id) for entry_id in entry_ids]
        if not ids:
            return []
        stmt = select(EntryModel).where(EntryModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> List[LedgerEntry]:
        stmt = select(EntryModel).order_by(EntryModel.due_date, EntryModel.created_at)

        if date_from is not None or date_to is not None:
            due_conditions = []
            paid_conditions = [EntryModel.paid_date.is_not(None)]
            if date_from is not None:
                due_conditions.append(EntryModel.due_date >= date_from)
                paid_conditions.append(EntryModel.paid_date >= date_from)
            if date_to is not None:
                due_conditions.append(EntryModel.due_date <= date_to)
                paid_conditions.append(EntryModel.paid_date <= date_to)
            stmt = stmt.where(or_(and_(*due_conditions), and_(*paid_conditions)))

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_for_account(self, account_id: UUID) -> List[LedgerEntry]:
        stmt = (
            select(EntryModel)
            .where(
                or_(
                    EntryModel.account_id == str(account_id),
                    EntryModel.destination_account_id == str(account_id),
                )
            )
            .order_by(EntryModel.due_date, EntryModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def list_by_group(self, group_id: UUID) -> List[LedgerEntry]:
        stmt = (
            select(EntryModel)
            .where(
                or_(
                    EntryModel.group_id == str(group_id),
                    EntryModel.settlement_group_id == str(group_id),
                )
            )
            .order_by(EntryModel.installment_number, EntryModel.due_date)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete_many(self, entry_ids: Iterable[UUID]) -> int:
        ids = [str(entry_id) for entry_id in entry_ids]
        if not ids:
            return 0
        result = await self._session.execute(delete(EntryModel).where(EntryModel.id.in_(ids)))
        return result.rowcount

    def _apply(self, model: EntryModel, entry: LedgerEntry) -> None:
        model.description = entry.description
        model.kind = entry.kind.value
        model.status = entry.status.value
        model.account_id = str(entry.account_id)
        model.destination_account_id = _str(entry.destination_account_id)
        model.category_id = _str(entry.category_id)
        model.contact_id = _str(entry.contact_id)
        model.due_date = entry.due_date
        model.paid_date = entry.paid_date
        model.transaction_date = entry.transaction_date
        model.gross_cents = entry.gross_cents
        model.fees_cents = entry.fees_cents
        model.interest_cents = entry.interest_cents
        model.installment_number = entry.installment_number
        model.installment_count = entry.installment_count
        model.group_id = _str(entry.group_id)
        model.settlement_group_id = _str(entry.settlement_group_id)
        model.origin_type = entry.origin.type.value
        model.origin_reference_id = _str(entry.origin.reference_id)
        model.notes = entry.notes

    def _to_entity(self, model: EntryModel) -> LedgerEntry:
        return LedgerEntry(
            id=UUID(str(model.id)),
            description=model.description,
            kind=EntryKind(model.kind),
            status=EntryStatus(model.status),
            account_id=UUID(str(model.account_id)),
            destination_account_id=_uuid(model.destination_account_id),
            category_id=_uuid(model.category_id),
            contact_id=_uuid(model.contact_id),
            due_date=model.due_date,
            paid_date=model.paid_date,
            transaction_date=model.transaction_date,
            gross_cents=model.gross_cents,
            fees_cents=model.fees_cents,
            interest_cents=model.interest_cents,
            installment_number=model.installment_number,
            installment_count=model.installment_count,
            group_id=_uuid(model.group_id),
            settlement_group_id=_uuid(model.settlement_group_id),
            origin=EntryOrigin(
                OriginType(model.origin_type),
                _uuid(model.origin_reference_id),
            ),
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
