# deebank_admin/crud/company_bank.py
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.core.config import settings
from deebank_admin.crud.base import backend_failure, commit
from deebank_admin.models.company_bank import CompanyBank
from deebank_admin.schemas.admin import CompanyBankCreate, CompanyBankUpdate
from deebank_admin.services.errors import RecordNotFound

# Schema field -> column
FIELD_COLUMNS = {
    "bank_name": "nome_do_banco",
    "iban": "iban",
    "beneficiary": "nome_favorecido",
    "active": "ativo",
}


def list_company_banks(db: Session) -> List[CompanyBank]:
    try:
        return list(db.execute(
            select(CompanyBank).order_by(CompanyBank.created_at.desc())
        ).scalars().all())
    except SQLAlchemyError as e:
        backend_failure(db, "list_company_banks", e)


def get_company_bank(db: Session, bank_id: str) -> CompanyBank:
    try:
        bank = db.get(CompanyBank, bank_id)
    except SQLAlchemyError as e:
        backend_failure(db, "get_company_bank", e)
    if bank is None:
        raise RecordNotFound(f"Company bank {bank_id} not found", id=bank_id)
    return bank


# Create a company account
def create_company_bank(db: Session, bank: CompanyBankCreate) -> CompanyBank:
    db_bank = CompanyBank(
        nome_do_banco=bank.bank_name.strip(),
        iban=bank.iban,
        nome_favorecido=(bank.beneficiary or "").strip() or settings.DEFAULT_BENEFICIARY,
        ativo=bank.active,
    )
    db.add(db_bank)
    return commit(db, "create_company_bank", db_bank)


def update_company_bank(db: Session, bank_id: str, changes: CompanyBankUpdate):
    """Apply the fields that were sent; returns the bank and the changed field names."""
    db_bank = get_company_bank(db, bank_id)
    changed = []
    for field, value in changes.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        column = FIELD_COLUMNS[field]
        if getattr(db_bank, column) != value:
            setattr(db_bank, column, value)
            changed.append(field)
    if changed:
        commit(db, "update_company_bank", db_bank)
    return db_bank, changed


def toggle_company_bank(db: Session, bank_id: str) -> CompanyBank:
    db_bank = get_company_bank(db, bank_id)
    db_bank.ativo = not db_bank.ativo
    return commit(db, "toggle_company_bank", db_bank)


def delete_company_bank(db: Session, bank_id: str) -> dict:
    db_bank = get_company_bank(db, bank_id)
    snapshot = db_bank.to_dict()
    db.delete(db_bank)
    commit(db, "delete_company_bank")
    return snapshot
