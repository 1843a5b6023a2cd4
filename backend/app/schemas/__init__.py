from app.schemas.common import DataResponse, MessageResponse
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceResponse,
    InvoiceItemRequest,
    InvoiceItemResponse,
)

__all__ = [
    "DataResponse",
    "MessageResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceResponse",
    "InvoiceItemRequest",
    "InvoiceItemResponse",
]
