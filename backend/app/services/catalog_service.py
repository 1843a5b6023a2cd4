"""
Catalog Service - products owned by a single user.

Every lookup is filtered by id and owner together, so a product owned by
someone else is reported exactly like a product that does not exist.
Name uniqueness per owner is enforced by the uq_products_owner_name index;
the lookup done before writing only gives an early, friendlier error.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import MAX_ROW_ID
from app.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models.product import Product, PRODUCT_NAME_MAX_LENGTH
from app.schemas.product import ProductCreate, ProductUpdate
from app.utils.invoice_math import non_negative_money

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Product name is required")
    if len(name) > PRODUCT_NAME_MAX_LENGTH:
        raise InvalidInputError(f"Product name cannot exceed {PRODUCT_NAME_MAX_LENGTH} characters")
    return name


def _clean_description(description: Optional[str]) -> str:
    description = (description or "").strip()
    if not description:
        raise InvalidInputError("Product description is required")
    return description


def _check_name_available(db: Session, owner_id: str, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Product).filter(Product.owner_id == owner_id, Product.name == name)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    if query.first():
        logger.warning(f"Product name '{name}' already used by owner {owner_id}")
        raise ConflictError(f"Product with name '{name}' already exists")


def _commit_or_conflict(db: Session, name: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        # Another request won the race between the pre-check and the write
        db.rollback()
        logger.warning(f"Unique index rejected product name '{name}'")
        raise ConflictError(f"Product with name '{name}' already exists")


def list_products(db: Session, owner_id: str) -> List[Product]:
    """All products owned by owner_id, newest first"""
    return (
        db.query(Product)
        .filter(Product.owner_id == owner_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def get_product(db: Session, owner_id: str, product_id: int) -> Product:
    if not 0 < product_id <= MAX_ROW_ID:
        raise NotFoundError("Product not found")
    product = db.query(Product).filter(
        Product.id == product_id,
        Product.owner_id == owner_id
    ).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


def find_product(db: Session, product_id: int, owner_id: Optional[str] = None) -> Product:
    """
    Look up a product to snapshot into an invoice line.

    Unlike get_product, the owner filter is optional here and the error names
    the missing product id.

    Raises:
        NotFoundError: no product with that id (within owner_id, when given)
    """
    if not 0 < product_id <= MAX_ROW_ID:
        raise NotFoundError(f"Product {product_id} not found", details={"product_id": product_id})
    query = db.query(Product).filter(Product.id == product_id)
    if owner_id is not None:
        query = query.filter(Product.owner_id == owner_id)
    product = query.first()
    if not product:
        raise NotFoundError(f"Product {product_id} not found", details={"product_id": product_id})
    return product


def create_product(db: Session, owner_id: str, data: ProductCreate) -> Product:
    name = _clean_name(data.name)
    description = _clean_description(data.description)
    if data.price is None:
        raise InvalidInputError("Product price is required")
    price = non_negative_money(data.price, "price")

    _check_name_available(db, owner_id, name)

    product = Product(
        owner_id=owner_id,
        name=name,
        description=description,
        price=price,
        image=data.image,
    )
    db.add(product)
    _commit_or_conflict(db, name)
    db.refresh(product)

    logger.info(f"Product created: {product.id} (owner: {owner_id})")
    return product


def update_product(db: Session, owner_id: str, product_id: int, patch: ProductUpdate) -> Product:
    """Apply the fields present in patch, re-checking name uniqueness when it changes"""
    product = get_product(db, owner_id, product_id)
    fields = patch.model_fields_set

    changes = {}
    if "name" in fields:
        changes["name"] = _clean_name(patch.name)
    if "description" in fields:
        changes["description"] = _clean_description(patch.description)
    if "price" in fields:
        if patch.price is None:
            raise InvalidInputError("Product price is required")
        changes["price"] = non_negative_money(patch.price, "price")
    if "image" in fields:
        changes["image"] = patch.image

    name = changes.get("name", product.name)
    if "name" in changes and changes["name"] != product.name:
        _check_name_available(db, owner_id, name, exclude_id=product.id)

    for field, value in changes.items():
        setattr(product, field, value)
    _commit_or_conflict(db, name)
    db.refresh(product)

    logger.info(f"Product updated: {product.id} (owner: {owner_id}, fields: {sorted(changes)})")
    return product


def delete_product(db: Session, owner_id: str, product_id: int) -> None:
    """Remove an owned product. Invoice lines keep their own copy of it."""
    product = get_product(db, owner_id, product_id)
    db.delete(product)
    db.commit()
    logger.info(f"Product deleted: {product_id} (owner: {owner_id})")
