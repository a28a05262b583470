"""PostgreSQL repository implementations for contacts, categories and products."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import (
    Category,
    CategoryType,
    Contact,
    ContactType,
    Product,
)
from src.domain.exceptions import ResourceNotFoundException
from src.domain.interfaces import (
    CategoryRepository,
    ContactRepository,
    ProductRepository,
)
from src.infrastructure.database.models import CategoryModel, ContactModel, ProductModel


class PostgresContactRepository(ContactRepository):
    """PostgreSQL-backed contact repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, contact: Contact) -> Contact:
        model = ContactModel(id=str(contact.id), created_at=contact.created_at)
        self._apply(model, contact)
        self._session.add(model)
        await self._session.flush()
        return contact

    async def update(self, contact: Contact) -> Contact:
        model = await self._session.get(ContactModel, str(contact.id))
        if model is None:
            raise ResourceNotFoundException("contact", str(contact.id))
        self._apply(model, contact)
        await self._session.flush()
        return contact

    async def get_by_id(self, contact_id: UUID) -> Optional[Contact]:
        model = await self._session.get(ContactModel, str(contact_id))
        return self._to_entity(model) if model is not None else None

    async def list(self) -> List[Contact]:
        result = await self._session.execute(select(ContactModel).order_by(ContactModel.name))
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, contact_id: UUID) -> None:
        await self._session.execute(delete(ContactModel).where(ContactModel.id == str(contact_id)))

    def _apply(self, model: ContactModel, contact: Contact) -> None:
        model.name = contact.name
        model.type = contact.type.value
        model.email = contact.email
        model.phone = contact.phone
        model.document = contact.document
        model.notes = contact.notes
        model.active = contact.active

    def _to_entity(self, model: ContactModel) -> Contact:
        return Contact(
            id=UUID(str(model.id)),
            name=model.name,
            type=ContactType(model.type),
            email=model.email,
            phone=model.phone,
            document=model.document,
            notes=model.notes,
            active=model.active,
            created_at=model.created_at,
        )


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL-backed category repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, category: Category) -> Category:
        model = CategoryModel(
            id=str(category.id),
            name=category.name,
            type=category.type.value,
            color=category.color,
            created_at=category.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return category

    async def update(self, category: Category) -> Category:
        model = await self._session.get(CategoryModel, str(category.id))
        if model is None:
            raise ResourceNotFoundException("category", str(category.id))
        model.name = category.name
        model.type = category.type.value
        model.color = category.color
        await self._session.flush()
        return category

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        model = await self._session.get(CategoryModel, str(category_id))
        return self._to_entity(model) if model is not None else None

    async def get_by_name(self, name: str) -> Optional[Category]:
        stmt = select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model is not None else None

    async def list(self) -> List[Category]:
        result = await self._session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, category_id: UUID) -> None:
        await self._session.execute(
            delete(CategoryModel).where(CategoryModel.id == str(category_id))
        )

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=UUID(str(model.id)),
            name=model.name,
            type=CategoryType(model.type),
            color=model.color,
            created_at=model.created_at,
        )


class PostgresProductRepository(ProductRepository):
    """PostgreSQL-backed product repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, product: Product) -> Product:
        model = ProductModel(id=str(product.id), created_at=product.created_at)
        self._apply(model, product)
        self._session.add(model)
        await self._session.flush()
        return product

    async def update(self, product: Product) -> Product:
        model = await self._session.get(ProductModel, str(product.id))
        if model is None:
            raise ResourceNotFoundException("product", str(product.id))
        self._apply(model, product)
        await self._session.flush()
        return product

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        model = await self._session.get(ProductModel, str(product_id))
        return self._to_entity(model) if model is not None else None

    async def list(self) -> List[Product]:
        result = await self._session.execute(select(ProductModel).order_by(ProductModel.name))
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete(self, product_id: UUID) -> None:
        await self._session.execute(delete(ProductModel).where(ProductModel.id == str(product_id)))

    def _apply(self, model: ProductModel, product: Product) -> None:
        model.name = product.name
        model.sku = product.sku
        model.sale_price_cents = product.sale_price_cents
        model.cost_cents = product.cost_cents
        model.min_stock = product.min_stock
        model.default_warehouse_id = (
            str(product.default_warehouse_id) if product.default_warehouse_id else None
        )
        model.active = product.active

    def _to_entity(self, model: ProductModel) -> Product:
        return Product(
            id=UUID(str(model.id)),
            name=model.name,
            sku=model.sku,
            sale_price_cents=model.sale_price_cents,
            cost_cents=model.cost_cents,
            min_stock=model.min_stock,
            default_warehouse_id=(
                UUID(str(model.default_warehouse_id)) if model.default_warehouse_id else None
            ),
            active=model.active,
            created_at=model.created_at,
        )
