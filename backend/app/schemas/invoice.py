from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class InvoiceItemResponse(BaseModel):
    product_id: int
    product_name: str
    product_desc: Optional[str]
    price: Decimal
    qty: int
    total: Decimal

    class Config:
        from_attributes = True


class InvoiceResponse(BaseModel):
    id: int
    owner_id: str
    recipient: str
    number: str
    items: List[InvoiceItemResponse] = []
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal
    status: str
    issue_date: datetime
    due_date: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class InvoiceItemRequest(BaseModel):
    """A requested line: which product and how many"""
    product_id: Optional[int] = Field(None, alias="productId")
    qty: Optional[int] = None

    class Config:
        populate_by_name = True


class InvoiceCreate(BaseModel):
    recipient: Optional[str] = None
    number: Optional[str] = None
    items: Optional[List[InvoiceItemRequest]] = None
    tax: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    status: Optional[str] = None
    issue_date: Optional[datetime] = Field(None, alias="issueDate")
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    notes: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date_is_none(cls, value):
        return _blank_to_none(value)

    class Config:
        populate_by_name = True


class InvoiceUpdate(BaseModel):
    """
    Partial update.

    A field left out of the body is untouched; ``due_date`` and ``notes``
    may be sent as null or an empty string to clear them. A non-empty
    ``items`` list replaces every line and recomputes the totals.
    """
    recipient: Optional[str] = None
    number: Optional[str] = None
    items: Optional[List[InvoiceItemRequest]] = None
    tax: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    status: Optional[str] = None
    issue_date: Optional[datetime] = Field(None, alias="issueDate")
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    notes: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date_is_none(cls, value):
        return _blank_to_none(value)

    class Config:
        populate_by_name = True
