# deebank_admin/crud/bonus_code.py
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.crud.base import backend_failure, commit
from deebank_admin.models.bonus_code import BonusCode
from deebank_admin.schemas.admin import BonusCodeCreate
from deebank_admin.services.errors import RecordNotFound


def list_bonus_codes(db: Session) -> List[BonusCode]:
    try:
        return list(db.execute(
            select(BonusCode).order_by(BonusCode.created_at.desc())
        ).scalars().all())
    except SQLAlchemyError as e:
        backend_failure(db, "list_bonus_codes", e)


# Codes are unique; a repeated code is rejected by the backend
def create_bonus_code(db: Session, bonus: BonusCodeCreate) -> BonusCode:
    db_code = BonusCode(
        codigo=bonus.code,
        valor=bonus.value,
        data_expiracao=bonus.expiry_date,
    )
    db.add(db_code)
    return commit(db, "create_bonus_code", db_code)


def delete_bonus_code(db: Session, code_id: str) -> dict:
    try:
        db_code = db.get(BonusCode, code_id)
    except SQLAlchemyError as e:
        backend_failure(db, "delete_bonus_code", e)
    if db_code is None:
        raise RecordNotFound(f"Bonus code {code_id} not found", id=code_id)
    snapshot = db_code.to_dict()
    db.delete(db_code)
    commit(db, "delete_bonus_code")
    return snapshot
