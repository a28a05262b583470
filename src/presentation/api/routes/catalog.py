"""Contact, category and product API endpoints."""

from dataclasses import replace
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from src.application.services import CatalogService
from src.core.dependencies import get_catalog_service
from src.domain.entities import Category, Contact, Product
from src.presentation.schemas import (
    CategoryRequestSchema,
    CategoryResponseSchema,
    ContactRequestSchema,
    ContactResponseSchema,
    ErrorResponseSchema,
    ProductRequestSchema,
    ProductResponseSchema,
)

catalog_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Resource not found"},
    },
)

Catalog = Annotated[CatalogService, Depends(get_catalog_service)]


# =============================================================================
# Contacts
# =============================================================================

@catalog_router.get("/contacts", response_model=list[ContactResponseSchema], tags=["Contacts"])
async def list_contacts(service: Catalog) -> list[ContactResponseSchema]:
    return [ContactResponseSchema.model_validate(c) for c in await service.list_contacts()]


@catalog_router.post(
    "/contacts",
    response_model=ContactResponseSchema,
    status_code=201,
    tags=["Contacts"],
)
async def create_contact(request: ContactRequestSchema, service: Catalog) -> ContactResponseSchema:
    contact = await service.create_contact(Contact(**request.model_dump()))
    return ContactResponseSchema.model_validate(contact)


@catalog_router.get("/contacts/{contact_id}", response_model=ContactResponseSchema, tags=["Contacts"])
async def get_contact(contact_id: UUID, service: Catalog) -> ContactResponseSchema:
    return ContactResponseSchema.model_validate(await service.get_contact(contact_id))


@catalog_router.put("/contacts/{contact_id}", response_model=ContactResponseSchema, tags=["Contacts"])
async def update_contact(
    contact_id: UUID,
    request: ContactRequestSchema,
    service: Catalog,
) -> ContactResponseSchema:
    current = await service.get_contact(contact_id)
    contact = await service.update_contact(replace(current, **request.model_dump()))
    return ContactResponseSchema.model_validate(contact)


@catalog_router.delete("/contacts/{contact_id}", status_code=204, tags=["Contacts"])
async def delete_contact(contact_id: UUID, service: Catalog) -> Response:
    await service.delete_contact(contact_id)
    return Response(status_code=204)


# =============================================================================
# Categories
# =============================================================================

@catalog_router.get("/categories", response_model=list[CategoryResponseSchema], tags=["Categories"])
async def list_categories(service: Catalog) -> list[CategoryResponseSchema]:
    return [CategoryResponseSchema.model_validate(c) for c in await service.list_categories()]


@catalog_router.post(
    "/categories",
    response_model=CategoryResponseSchema,
    status_code=201,
    tags=["Categories"],
)
async def create_category(request: CategoryRequestSchema, service: Catalog) -> CategoryResponseSchema:
    category = await service.create_category(Category(**request.model_dump()))
    return CategoryResponseSchema.model_validate(category)


@catalog_router.get(
    "/categories/{category_id}",
    response_model=CategoryResponseSchema,
    tags=["Categories"],
)
async def get_category(category_id: UUID, service: Catalog) -> CategoryResponseSchema:
    return CategoryResponseSchema.model_validate(await service.get_category(category_id))


@catalog_router.put(
    "/categories/{category_id}",
    response_model=CategoryResponseSchema,
    tags=["Categories"],
)
async def update_category(
    category_id: UUID,
    request: CategoryRequestSchema,
    service: Catalog,
) -> CategoryResponseSchema:
    current = await service.get_category(category_id)
    category = await service.update_category(replace(current, **request.model_dump()))
    return CategoryResponseSchema.model_validate(category)


@catalog_router.delete("/categories/{category_id}", status_code=204, tags=["Categories"])
async def delete_category(category_id: UUID, service: Catalog) -> Response:
    await service.delete_category(category_id)
    return Response(status_code=204)


# =============================================================================
# Products
# =============================================================================

@catalog_router.get("/products", response_model=list[ProductResponseSchema], tags=["Products"])
async def list_products(service: Catalog) -> list[ProductResponseSchema]:
    return [ProductResponseSchema.model_validate(p) for p in await service.list_products()]


@catalog_router.post(
    "/products",
    response_model=ProductResponseSchema,
    status_code=201,
    tags=["Products"],
)
async def create_product(request: ProductRequestSchema, service: Catalog) -> ProductResponseSchema:
    product = await service.create_product(Product(**request.model_dump()))
    return ProductResponseSchema.model_validate(product)


@catalog_router.get("/products/{product_id}", response_model=ProductResponseSchema, tags=["Products"])
async def get_product(product_id: UUID, service: Catalog) -> ProductResponseSchema:
    return ProductResponseSchema.model_validate(await service.get_product(product_id))


@catalog_router.put("/products/{product_id}", response_model=ProductResponseSchema, tags=["Products"])
async def update_product(
    product_id: UUID,
    request: ProductRequestSchema,
    service: Catalog,
) -> ProductResponseSchema:
    current = await service.get_product(product_id)
    product = await service.update_product(replace(current, **request.model_dump()))
    return ProductResponseSchema.model_validate(product)


@catalog_router.delete("/products/{product_id}", status_code=204, tags=["Products"])
async def delete_product(product_id: UUID, service: Catalog) -> Response:
    await service.delete_product(product_id)
    return Response(status_code=204)
