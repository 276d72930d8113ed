# app/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.context import current_user_id
from app.data.database import get_db
from app.domain.schemas import CategoryOut, ProductOut
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"], dependencies=[Depends(current_user_id)])


def get_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(svc: CatalogService = Depends(get_service)):
    return svc.list_categories()


@router.get("/products/{category_id}", response_model=List[ProductOut])
def list_products(category_id: int, svc: CatalogService = Depends(get_service)):
    return svc.list_products(category_id)


@router.get("/product/{product_id}", response_model=ProductOut)
def get_product(product_id: int, svc: CatalogService = Depends(get_service)):
    return svc.get_product(product_id)
