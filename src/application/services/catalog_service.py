"""Catalog service - contacts, categories and products."""

from typing import List
from uuid import UUID

import structlog

from src.domain.entities import Category, Contact, Product
from src.domain.exceptions import InvalidInputException, ResourceNotFoundException
from src.domain.interfaces import CategoryRepository, ContactRepository, ProductRepository

logger = structlog.get_logger(__name__)


class CatalogService:
    """
    Application service for reference data.

    Plain CRUD; entities go in and out unchanged.
    """

    def __init__(
        self,
        contact_repository: ContactRepository,
        category_repository: CategoryRepository,
        product_repository: ProductRepository,
    ):
        self._contact_repo = contact_repository
        self._category_repo = category_repository
        self._product_repo = product_repository

    # Contacts
    async def create_contact(self, contact: Contact) -> Contact:
        _require_name(contact.name)
        await self._contact_repo.add(contact)
        logger.info("contact_created", contact_id=str(contact.id), type=contact.type.value)
        return contact

    async def update_contact(self, contact: Contact) -> Contact:
        _require_name(contact.name)
        await self.get_contact(contact.id)
        return await self._contact_repo.update(contact)

    async def get_contact(self, contact_id: UUID) -> Contact:
        contact = await self._contact_repo.get_by_id(contact_id)
        if contact is None:
            raise ResourceNotFoundException("contact", str(contact_id))
        return contact

    async def list_contacts(self) -> List[Contact]:
        return await self._contact_repo.list()

    async def delete_contact(self, contact_id: UUID) -> None:
        await self.get_contact(contact_id)
        await self._contact_repo.delete(contact_id)
        logger.info("contact_deleted", contact_id=str(contact_id))

    # Categories
    async def create_category(self, category: Category) -> Category:
        _require_name(category.name)
        if await self._category_repo.get_by_name(category.name) is not None:
            raise InvalidInputException(f"Category already exists: {category.name}")
        await self._category_repo.add(category)
        logger.info("category_created", category_id=str(category.id))
        return category

    async def update_category(self, category: Category) -> Category:
        _require_name(category.name)
        await self.get_category(category.id)
        return await self._category_repo.update(category)

    async def get_category(self, category_id: UUID) -> Category:
        category = await self._category_repo.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundException("category", str(category_id))
        return category

    async def list_categories(self) -> List[Category]:
        return await self._category_repo.list()

    async def delete_category(self, category_id: UUID) -> None:
        await self.get_category(category_id)
        await self._category_repo.delete(category_id)
        logger.info("category_deleted", category_id=str(category_id))

    # Products
    async def create_product(self, product: Product) -> Product:
        _require_name(product.name)
        await self._require_warehouse(product)
        await self._product_repo.add(product)
        logger.info("product_created", product_id=str(product.id), sku=product.sku)
        return product

    async def update_product(self, product: Product) -> Product:
        _require_name(product.name)
        await self.get_product(product.id)
        await self._require_warehouse(product)
        return await self._product_repo.update(product)

    async def get_product(self, product_id: UUID) -> Product:
        product = await self._product_repo.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundException("product", str(product_id))
        return product

    async def list_products(self) -> List[Product]:
        return await self._product_repo.list()

    async def delete_product(self, product_id: UUID) -> None:
        await self.get_product(product_id)
        await self._product_repo.delete(product_id)
        logger.info("product_deleted", product_id=str(product_id))

    async def _require_warehouse(self, product: Product) -> None:
        if product.default_warehouse_id is None:
            return
        warehouse = await self.get_contact(product.default_warehouse_id)
        if not warehouse.is_warehouse:
            raise InvalidInputException(f"Contact {warehouse.id} is not a warehouse partner")


def _require_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidInputException("name is required")
