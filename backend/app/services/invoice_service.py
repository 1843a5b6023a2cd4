"""
Invoice Service - builds and mutates invoices from requested line items.

Writing lines is resolve-then-freeze: every requested product is looked up
first (the first missing one aborts the whole operation), then each is frozen
into a LineSnapshot, then subtotal/tax/discount/total are derived from the
snapshots. Nothing touches the session until all of that has succeeded, so a
failed request never leaves a partially written invoice behind.

Invoice numbers are unique across all owners. As with product names, the
unique index is the real guarantee; the pre-check only fails fast.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.config import settings
from app.database import MAX_ROW_ID
from app.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models.invoice import Invoice, InvoiceStatus, NOTES_MAX_LENGTH, RECIPIENT_MAX_LENGTH
from app.models.invoice_item import InvoiceItem
from app.schemas.invoice import InvoiceCreate, InvoiceItemRequest, InvoiceUpdate
from app.services import catalog_service
from app.utils.invoice_math import LineSnapshot, InvoiceTotals, check_qty, compute_totals, snapshot_line, summarize

logger = logging.getLogger(__name__)

ALLOWED_STATUSES = [status.value for status in InvoiceStatus]


def _clean_recipient(recipient: Optional[str]) -> str:
    recipient = (recipient or "").strip()
    if not recipient:
        raise InvalidInputError("Recipient is required")
    if len(recipient) > RECIPIENT_MAX_LENGTH:
        raise InvalidInputError(f"Recipient name cannot exceed {RECIPIENT_MAX_LENGTH} characters")
    return recipient


def _clean_number(number: Optional[str]) -> str:
    number = (number or "").strip()
    if not number:
        raise InvalidInputError("Invoice number is required")
    return number


def _clean_status(status: Optional[str]) -> str:
    try:
        return InvoiceStatus(status).value
    except ValueError:
        raise InvalidInputError(
            f"Invalid status '{status}'. Allowed values: {', '.join(ALLOWED_STATUSES)}"
        )


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    """Blank notes are stored as no notes"""
    notes = (notes or "").strip()
    if not notes:
        return None
    if len(notes) > NOTES_MAX_LENGTH:
        raise InvalidInputError(f"Notes cannot exceed {NOTES_MAX_LENGTH} characters")
    return notes


def _resolve_lines(db: Session, owner_id: str, items: List[InvoiceItemRequest]) -> List[LineSnapshot]:
    """
    Validate the requested items, resolve their products and freeze them

    Raises:
        InvalidInputError: an item lacks a product id or its qty is out of range
        NotFoundError: a referenced product does not exist
    """
    for item in items:
        if item.product_id is None or item.qty is None:
            raise InvalidInputError("Each item must have productId and qty")
        check_qty(item.qty)

    scope = owner_id if settings.scope_invoice_products_to_owner else None
    products = []
    for item in items:
        try:
            products.append(catalog_service.find_product(db, item.product_id, owner_id=scope))
        except NotFoundError:
            logger.warning(f"Invoice item references missing product {item.product_id} (owner: {owner_id})")
            raise

    return [snapshot_line(product, item.qty) for product, item in zip(products, items)]


def _build_items(lines: List[LineSnapshot]) -> List[InvoiceItem]:
    return [
        InvoiceItem(
            position=position,
            product_id=line.product_id,
            product_name=line.product_name,
            product_desc=line.product_desc,
            price=line.price,
            qty=line.qty,
            total=line.total,
        )
        for position, line in enumerate(lines)
    ]


def _apply_totals(invoice: Invoice, totals: InvoiceTotals) -> None:
    invoice.subtotal = totals.subtotal
    invoice.tax = totals.tax
    invoice.discount = totals.discount
    invoice.total = totals.total


def _check_number_available(db: Session, number: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Invoice).filter(Invoice.number == number)
    if exclude_id is not None:
        query = query.filter(Invoice.id != exclude_id)
    if query.first():
        logger.warning(f"Invoice number '{number}' already exists")
        raise ConflictError("Invoice number already exists")


def _commit_or_conflict(db: Session, number: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Unique index rejected invoice number '{number}'")
        raise ConflictError("Invoice number already exists")


def list_invoices(db: Session, owner_id: str, status: Optional[str] = None) -> List[Invoice]:
    """All invoices owned by owner_id, newest first, optionally filtered by status"""
    query = db.query(Invoice).options(selectinload(Invoice.items)).filter(Invoice.owner_id == owner_id)
    if status is not None:
        query = query.filter(Invoice.status == _clean_status(status))
    return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()


def get_invoice(db: Session, owner_id: str, invoice_id: int) -> Invoice:
    if not 0 < invoice_id <= MAX_ROW_ID:
        raise NotFoundError("Invoice not found")
    invoice = db.query(Invoice).filter(
        Invoice.id == invoice_id,
        Invoice.owner_id == owner_id
    ).first()
    if not invoice:
        raise NotFoundError("Invoice not found")
    return invoice


def create_invoice(db: Session, owner_id: str, data: InvoiceCreate) -> Invoice:
    """
    Create an invoice from (productId, qty) requests

    Returns:
        The persisted invoice with its snapshotted items and computed totals

    Raises:
        InvalidInputError: missing recipient/number/items, bad item, bad amounts
        NotFoundError: a referenced product does not exist
        ConflictError: the invoice number is already taken by any owner
    """
    if not (data.recipient or "").strip() or not (data.number or "").strip() or not data.items:
        raise InvalidInputError("Recipient, invoice number, and at least one item are required")

    recipient = _clean_recipient(data.recipient)
    number = _clean_number(data.number)
    status = _clean_status(data.status) if data.status is not None else InvoiceStatus.DRAFT.value
    notes = _clean_notes(data.notes)

    lines = _resolve_lines(db, owner_id, data.items)
    totals = compute_totals(lines, data.tax, data.discount)

    _check_number_available(db, number)

    invoice = Invoice(
        owner_id=owner_id,
        recipient=recipient,
        number=number,
        status=status,
        issue_date=data.issue_date or datetime.now(timezone.utc),
        due_date=data.due_date,
        notes=notes,
        items=_build_items(lines),
    )
    _apply_totals(invoice, totals)
    db.add(invoice)
    _commit_or_conflict(db, number)
    db.refresh(invoice)

    logger.info(
        f"Invoice created: {invoice.id} (owner: {owner_id}, number: {number}, "
        f"items: {len(lines)}, total: {invoice.total})"
    )
    return invoice


def update_invoice(db: Session, owner_id: str, invoice_id: int, patch: InvoiceUpdate) -> Invoice:
    """
    Apply a partial update to an owned invoice

    Only fields present in the patch change. A non-empty items list replaces
    all lines and recomputes every total, with absent tax/discount counted as
    zero; an empty list leaves the current lines alone. Tax or discount sent
    without items are applied to the stored subtotal.
    """
    invoice = get_invoice(db, owner_id, invoice_id)
    fields = patch.model_fields_set

    changes = {}
    if "recipient" in fields:
        changes["recipient"] = _clean_recipient(patch.recipient)
    if "number" in fields:
        changes["number"] = _clean_number(patch.number)
    if "status" in fields:
        changes["status"] = _clean_status(patch.status)
    if "issue_date" in fields:
        if patch.issue_date is None:
            raise InvalidInputError("Issue date cannot be cleared")
        changes["issue_date"] = patch.issue_date
    if "due_date" in fields:
        changes["due_date"] = patch.due_date
    if "notes" in fields:
        changes["notes"] = _clean_notes(patch.notes)

    new_lines = None
    totals = None
    if patch.items:
        new_lines = _resolve_lines(db, owner_id, patch.items)
        totals = compute_totals(new_lines, patch.tax, patch.discount)
    elif "tax" in fields or "discount" in fields:
        totals = summarize(
            invoice.subtotal,
            patch.tax if "tax" in fields else invoice.tax,
            patch.discount if "discount" in fields else invoice.discount,
        )

    number = changes.get("number", invoice.number)
    if number != invoice.number:
        _check_number_available(db, number, exclude_id=invoice.id)

    for field, value in changes.items():
        setattr(invoice, field, value)
    if new_lines is not None:
        invoice.items = _build_items(new_lines)
    if totals is not None:
        _apply_totals(invoice, totals)
    _commit_or_conflict(db, number)
    db.refresh(invoice)

    logger.info(
        f"Invoice updated: {invoice.id} (owner: {owner_id}, fields: {sorted(fields)}, "
        f"items replaced: {new_lines is not None})"
    )
    return invoice


def delete_invoice(db: Session, owner_id: str, invoice_id: int) -> None:
    invoice = get_invoice(db, owner_id, invoice_id)
    db.delete(invoice)
    db.commit()
    logger.info(f"Invoice deleted: {invoice_id} (owner: {owner_id})")
