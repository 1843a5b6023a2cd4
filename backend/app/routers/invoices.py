from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.dependencies import get_owner_id
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.invoice import InvoiceCreate, InvoiceUpdate, InvoiceResponse
from app.services import invoice_service

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=DataResponse[List[InvoiceResponse]])
def list_invoices(
    status: Optional[str] = Query(None, description="Filter by status"),
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """List the caller's invoices, newest first"""
    return {"data": invoice_service.list_invoices(db, owner_id, status=status)}


@router.get("/{invoice_id}", response_model=DataResponse[InvoiceResponse])
def get_invoice(invoice_id: int, owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    """Get invoice detail with its line items"""
    return {"data": invoice_service.get_invoice(db, owner_id, invoice_id)}


@router.post("", response_model=DataResponse[InvoiceResponse], status_code=201)
def create_invoice(
    invoice_data: InvoiceCreate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Create an invoice, snapshotting each referenced product and computing totals"""
    return {"data": invoice_service.create_invoice(db, owner_id, invoice_data)}


@router.put("/{invoice_id}", response_model=DataResponse[InvoiceResponse])
def update_invoice(
    invoice_id: int,
    patch: InvoiceUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Partially update an invoice; a non-empty items list replaces all lines"""
    return {"data": invoice_service.update_invoice(db, owner_id, invoice_id, patch)}


@router.delete("/{invoice_id}", response_model=MessageResponse)
def delete_invoice(invoice_id: int, owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    invoice_service.delete_invoice(db, owner_id, invoice_id)
    return {"message": "Invoice deleted successfully"}
