from enum import Enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

RECIPIENT_MAX_LENGTH = 200
NOTES_MAX_LENGTH = 1000


class InvoiceStatus(str, Enum):
    """Invoice lifecycle: draft -> sent -> paid, cancelled from anywhere"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("ix_invoices_owner_created", "owner_id", "created_at"),
        Index("ix_invoices_owner_status", "owner_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    recipient = Column(String(RECIPIENT_MAX_LENGTH), nullable=False)
    number = Column(String, unique=True, nullable=False, index=True)  # Unique across all owners
    subtotal = Column(Numeric(12, 2), nullable=False)
    tax = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default=InvoiceStatus.DRAFT.value, index=True)
    issue_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(String(NOTES_MAX_LENGTH), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )
