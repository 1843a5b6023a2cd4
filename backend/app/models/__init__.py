from app.models.product import Product
from app.models.invoice import Invoice, InvoiceStatus
from app.models.invoice_item import InvoiceItem

__all__ = ["Product", "Invoice", "InvoiceStatus", "InvoiceItem"]
