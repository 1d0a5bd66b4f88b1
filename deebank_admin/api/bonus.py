# deebank_admin/api/bonus.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session, log_admin_action
from deebank_admin.core.i18n import request_language, t
from deebank_admin.crud import bonus_code as crud
from deebank_admin.db import get_db
from deebank_admin.schemas.admin import BonusCodeCreate
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/bonus-codes", tags=["Bonus Codes"])


@router.get("", response_model=List[dict])
def list_bonus_codes(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    return [code.to_dict() for code in crud.list_bonus_codes(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_bonus_code(
    body: BonusCodeCreate,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    """Issue a reward code; a code that already exists is rejected with 409"""
    code = crud.create_bonus_code(db, body)
    log_admin_action(session, "audit.bonus.created", code=code.codigo, value=code.valor)
    return {"message": t("bonus.created", request_language(request), code=code.codigo), "bonus": code.to_dict()}


@router.delete("/{code_id}")
def delete_bonus_code(
    code_id: str,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    removed = crud.delete_bonus_code(db, code_id)
    log_admin_action(session, "audit.bonus.deleted", code=removed["code"])
    return {"message": t("bonus.deleted", request_language(request), code=removed["code"]), "id": removed["id"]}
