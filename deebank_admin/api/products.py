# deebank_admin/api/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session, log_admin_action, state_label
from deebank_admin.core.config import settings
from deebank_admin.core.i18n import request_language, t
from deebank_admin.crud import product as crud
from deebank_admin.db import get_db
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[dict])
def list_products(
    search: Optional[str] = None,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    return [p.to_dict() for p in crud.list_products(db, search)]


@router.post("/{product_id}/toggle")
def toggle_product(
    product_id: str,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    product = crud.toggle_product(db, product_id)
    active = product.estado == crud.ACTIVE
    log_admin_action(
        session, "audit.product.toggled",
        name=product.nome, state=state_label(active, settings.AUDIT_LANGUAGE),
    )
    lang = request_language(request)
    return {
        "message": t("product.toggled", lang, name=product.nome, state=state_label(active, lang)),
        "product": product.to_dict(),
    }
