# deebank_admin/api/company_banks.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session, log_admin_action, state_label
from deebank_admin.core.config import settings
from deebank_admin.core.i18n import request_language, t
from deebank_admin.crud import company_bank as crud
from deebank_admin.db import get_db
from deebank_admin.schemas.admin import CompanyBankCreate, CompanyBankUpdate
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/company-banks", tags=["Company Banks"])


@router.get("", response_model=List[dict])
def list_company_banks(
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    return [bank.to_dict() for bank in crud.list_company_banks(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_company_bank(
    body: CompanyBankCreate,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    bank = crud.create_company_bank(db, body)
    log_admin_action(session, "audit.bank.created", bank=bank.nome_do_banco, iban=bank.iban)
    return {"message": t("bank.saved", request_language(request)), "bank": bank.to_dict()}


@router.put("/{bank_id}")
def update_company_bank(
    bank_id: str,
    body: CompanyBankUpdate,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    bank, changed = crud.update_company_bank(db, bank_id, body)
    if changed:
        log_admin_action(session, "audit.bank.updated", id=bank.id, changes=", ".join(changed))
    return {"message": t("bank.saved", request_language(request)), "bank": bank.to_dict()}


@router.post("/{bank_id}/toggle")
def toggle_company_bank(
    bank_id: str,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    bank = crud.toggle_company_bank(db, bank_id)
    log_admin_action(
        session, "audit.bank.toggled",
        bank=bank.nome_do_banco, state=state_label(bank.ativo, settings.AUDIT_LANGUAGE),
    )
    lang = request_language(request)
    return {"message": t("bank.toggled", lang, state=state_label(bank.ativo, lang)), "bank": bank.to_dict()}


@router.delete("/{bank_id}")
def delete_company_bank(
    bank_id: str,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    removed = crud.delete_company_bank(db, bank_id)
    log_admin_action(session, "audit.bank.deleted", bank=removed["bank_name"], iban=removed["iban"])
    return {"message": t("bank.deleted", request_language(request)), "id": removed["id"]}
