"""
Domain errors raised by the catalog and invoice services.

Routers never translate these by hand: app.main registers a single handler
that turns any InvoicingError into a JSON response with ``status_code``.
"""
from typing import Optional


class InvoicingError(Exception):
    """Base class for errors reported verbatim to the caller"""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(InvoicingError):
    """Missing or malformed fields, empty item list, non-positive quantity"""

    status_code = 400


class NotFoundError(InvoicingError):
    """Unknown id, id owned by another user, or unknown referenced product"""

    status_code = 404


class ConflictError(InvoicingError):
    """Duplicate product name for an owner or duplicate invoice number"""

    status_code = 409
