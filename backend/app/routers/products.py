from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.dependencies import get_owner_id
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from app.services import catalog_service

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=DataResponse[List[ProductResponse]])
def list_products(owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    """List the caller's products, newest first"""
    return {"data": catalog_service.list_products(db, owner_id)}


@router.get("/{product_id}", response_model=DataResponse[ProductResponse])
def get_product(product_id: int, owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    return {"data": catalog_service.get_product(db, owner_id, product_id)}


@router.post("", response_model=DataResponse[ProductResponse], status_code=201)
def create_product(
    product_data: ProductCreate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Create a product; names are unique per owner"""
    return {"data": catalog_service.create_product(db, owner_id, product_data)}


@router.put("/{product_id}", response_model=DataResponse[ProductResponse])
def update_product(
    product_id: int,
    patch: ProductUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db)
):
    """Update the fields present in the body"""
    return {"data": catalog_service.update_product(db, owner_id, product_id, patch)}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: int, owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    catalog_service.delete_product(db, owner_id, product_id)
    return {"message": "Product deleted successfully"}
