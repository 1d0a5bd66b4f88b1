# deebank_admin/crud/product.py
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.crud.base import backend_failure, commit
from deebank_admin.models.product import Product
from deebank_admin.services.errors import RecordNotFound

ACTIVE = "ACTIVE"
INACTIVE = "INACTIVE"


def list_products(db: Session, search: Optional[str] = None) -> List[Product]:
    stmt = select(Product)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Product.nome.ilike(pattern), Product.categoria.ilike(pattern)))
    stmt = stmt.order_by(Product.created_at.desc())
    try:
        return list(db.execute(stmt).scalars().all())
    except SQLAlchemyError as e:
        backend_failure(db, "list_products", e)


def toggle_product(db: Session, product_id: str) -> Product:
    try:
        product = db.get(Product, product_id)
    except SQLAlchemyError as e:
        backend_failure(db, "toggle_product", e)
    if product is None:
        raise RecordNotFound(f"Product {product_id} not found", id=product_id)
    product.estado = INACTIVE if (product.estado or "").upper() == ACTIVE else ACTIVE
    return commit(db, "toggle_product", product)
