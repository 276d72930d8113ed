# app/services/catalog_service.py
from sqlalchemy.orm import Session

from app.domain.errors import NotFound, ERROR_PRODUCT_NOT_FOUND
from app.domain.schemas import CategoryOut, ProductOut
from app.repos.catalog_repo import CatalogRepo


class CatalogService:
    """Katalog tylko do odczytu."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def list_categories(self) -> list[CategoryOut]:
        return [CategoryOut.model_validate(c) for c in self.repo.list_categories()]

    def list_products(self, category_id: int) -> list[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products(category_id)]

    def get_product(self, product_id: int) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound(ERROR_PRODUCT_NOT_FOUND)
        return ProductOut.model_validate(product)
