from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ProductResponse(BaseModel):
    id: int
    owner_id: str
    name: str
    description: str
    price: Decimal
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    # Required fields are checked by the catalog service so that missing
    # values surface as InvalidInputError rather than schema errors
    name: Optional[str] = None
    description: Optional[str] = Field(None, alias="desc")
    price: Optional[Decimal] = None
    image: Optional[str] = None

    class Config:
        populate_by_name = True


class ProductUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied"""
    name: Optional[str] = None
    description: Optional[str] = Field(None, alias="desc")
    price: Optional[Decimal] = None
    image: Optional[str] = None

    class Config:
        populate_by_name = True
