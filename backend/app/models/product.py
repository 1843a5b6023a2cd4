from sqlalchemy import Column, Integer, String, Numeric, DateTime, Text, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base

PRODUCT_NAME_MAX_LENGTH = 200


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_products_owner_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String(PRODUCT_NAME_MAX_LENGTH), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    image = Column(String, nullable=True)  # Opaque reference, files live elsewhere
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
