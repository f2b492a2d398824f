from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from db.models import Product
from db.repositories import ProductRepository
from interfaces.productModels import ProductCreate, ProductUpdate
from logger_manager import log_info
from utils.errors import NotFound, ValidationFailure, field_error


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def add_product(self, product_create: ProductCreate) -> Product:
        product = self.repo.create(product_create.model_dump())
        log_info(f"Product {product.id} created: {product.name}")
        return product

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.repo.get_by_id(product_id)

    def require_product(self, product_id: int) -> Product:
        product = self.repo.get_by_id(product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def search_products(self, search: Optional[str], category: Optional[str], page: int, limit: int) -> Tuple[List[Product], int]:
        return self.repo.search(search=search, category=category, skip=(page - 1) * limit, limit=limit)

    def update_product(self, product_id: int, product_update: ProductUpdate) -> Product:
        product = self.require_product(product_id)
        return self.repo.update(product, product_update.model_dump(exclude_unset=True))

    def delete_product(self, product_id: int):
        product = self.require_product(product_id)
        if self.repo.has_reports(product_id):
            raise ValidationFailure(
                "Product is referenced by existing reports",
                details=[field_error("id", "Delete the product's reports first")],
            )
        self.repo.delete(product)
        log_info(f"Product {product_id} deleted")
