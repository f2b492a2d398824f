from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from db.database import get_db
from db.models import User
from interfaces.productModels import ProductCreate, ProductResponse, ProductUpdate
from logger_manager import log_info, log_error
from services.auth_service import get_current_user
from services.product_service import ProductService
from utils.errors import AppError, ServerFault
from utils.response_utils import paginated, serialize, serialize_many

router = APIRouter()


@router.get("")
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, max_length=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    log_info("List products endpoint called")
    try:
        search = search.strip() if search else None
        category = category.strip() if category else None
        products, total = ProductService(db).search_products(search, category, page, limit)
        return paginated(serialize_many(ProductResponse, products), total, page, limit)
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in list_products endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching products")


@router.get("/{product_id}")
def read_product(product_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_info(f"Read product endpoint called for {product_id}")
    try:
        product = ProductService(db).require_product(product_id)
        return {"success": True, "data": serialize(ProductResponse, product)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in read_product endpoint: {str(e)}", e)
        raise ServerFault("Server error fetching product")


@router.post("", status_code=201)
def create_product(product: ProductCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_info("Create product endpoint called")
    try:
        db_product = ProductService(db).add_product(product)
        return {"success": True, "data": serialize(ProductResponse, db_product)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in create_product endpoint: {str(e)}", e)
        raise ServerFault("Server error creating product")


@router.put("/{product_id}")
def update_product(
    product_id: int,
    product: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    log_info(f"Update product endpoint called for {product_id}")
    try:
        db_product = ProductService(db).update_product(product_id, product)
        return {"success": True, "data": serialize(ProductResponse, db_product)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in update_product endpoint: {str(e)}", e)
        raise ServerFault("Server error updating product")


@router.delete("/{product_id}")
def delete_product(product_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_info(f"Delete product endpoint called for {product_id}")
    try:
        ProductService(db).delete_product(product_id)
        return {"success": True, "message": "Product deleted successfully"}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in delete_product endpoint: {str(e)}", e)
        raise ServerFault("Server error deleting product")
