from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.database import Base


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    # No foreign key: deleting a product must leave invoices untouched
    product_id = Column(Integer, nullable=False)
    product_name = Column(String, nullable=False)
    product_desc = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    qty = Column(Integer, nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")
