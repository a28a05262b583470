"""Contact, category and product Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import CategoryType, ContactType


class ContactRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ContactType
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    notes: str = ""
    active: bool = True


class ContactResponseSchema(ContactRequestSchema):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class CategoryRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: CategoryType
    color: Optional[str] = Field(None, examples=["#3366ff"])


class CategoryResponseSchema(CategoryRequestSchema):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class ProductRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    sku: Optional[str] = None
    sale_price_cents: int = Field(0, ge=0)
    cost_cents: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0, description="Reorder threshold")
    default_warehouse_id: Optional[UUID] = None
    active: bool = True


class ProductResponseSchema(ProductRequestSchema):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
