"""
Seed script to generate a synthetic product catalog and invoices for demo purposes

Usage:
    python scripts/seed_data.py [owner_id]

The owner id defaults to SEED_OWNER_ID from the environment, or "demo-user".
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from app.config import settings
from app.database import SessionLocal
from app.exceptions import ConflictError
from app.models.product import Product
from app.models.invoice import Invoice, InvoiceStatus
from app.schemas.product import ProductCreate
from app.schemas.invoice import InvoiceCreate, InvoiceItemRequest
from app.services import catalog_service, invoice_service
from decimal import Decimal
from datetime import datetime, timedelta, timezone
from faker import Faker
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

fake = Faker()


def create_products(db: Session, owner_id: str, count: int = 10) -> list[Product]:
    """Create synthetic products for one owner"""
    products = []
    while len(products) < count:
        product_data = ProductCreate(
            name=fake.unique.catch_phrase()[:200],
            description=fake.sentence(nb_words=12),
            price=Decimal(str(round(fake.random.uniform(5.0, 500.0), 2))),
        )
        try:
            products.append(catalog_service.create_product(db, owner_id, product_data))
        except ConflictError:
            continue  # Name already in this owner's catalog from an earlier run
    return products


def create_invoices(db: Session, owner_id: str, products: list[Product], count: int = 8) -> list[Invoice]:
    """Create synthetic invoices, each referencing 1-4 of the owner's products"""
    invoices = []
    run_tag = datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')
    for i in range(count):
        chosen = fake.random_elements(elements=products, length=fake.random_int(min=1, max=4), unique=True)
        issue_date = datetime.now(timezone.utc) - timedelta(days=fake.random_int(min=0, max=60))
        invoice_data = InvoiceCreate(
            recipient=fake.company(),
            number=f"INV-{run_tag}-{str(i+1).zfill(4)}",
            items=[
                InvoiceItemRequest(product_id=product.id, qty=fake.random_int(min=1, max=20))
                for product in chosen
            ],
            tax=Decimal(str(round(fake.random.uniform(0.0, 50.0), 2))),
            discount=Decimal("0.00"),
            status=fake.random_element(elements=[status.value for status in InvoiceStatus]),
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=30),
            notes=fake.sentence() if fake.boolean() else None,
        )
        invoices.append(invoice_service.create_invoice(db, owner_id, invoice_data))
    return invoices


def main():
    owner_id = sys.argv[1] if len(sys.argv) > 1 else (settings.seed_owner_id or "demo-user")
    db = SessionLocal()
    try:
        logger.info(f"Seeding data for owner: {owner_id}")
        products = create_products(db, owner_id)
        logger.info(f"Created {len(products)} products")
        invoices = create_invoices(db, owner_id, products)
        logger.info(f"Created {len(invoices)} invoices")
    finally:
        db.close()


if __name__ == "__main__":
    main()
