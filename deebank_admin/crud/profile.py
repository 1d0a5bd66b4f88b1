# deebank_admin/crud/profile.py
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.crud.base import backend_failure, commit
from deebank_admin.models.profile import Profile
from deebank_admin.services.errors import RecordNotFound
from deebank_admin.utils.dates import local_day_bounds


def list_profiles(
    db: Session,
    search: Optional[str] = None,
    on_date: Optional[date] = None,
    limit: int = 100,
) -> List[Profile]:
    """Profiles newest first, by name/phone substring and local creation day."""
    stmt = select(Profile)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(Profile.full_name.ilike(pattern), Profile.phone.ilike(pattern)))
    if on_date:
        start, end = local_day_bounds(on_date)
        stmt = stmt.where(Profile.created_at >= start, Profile.created_at <= end)
    stmt = stmt.order_by(Profile.created_at.desc()).limit(limit)
    try:
        return list(db.execute(stmt).scalars().all())
    except SQLAlchemyError as e:
        backend_failure(db, "list_profiles", e)


def get_profile(db: Session, user_id: str) -> Profile:
    try:
        profile = db.get(Profile, user_id)
    except SQLAlchemyError as e:
        backend_failure(db, "get_profile", e)
    if profile is None:
        raise RecordNotFound(f"User {user_id} not found", id=user_id)
    return profile


def set_balance(db: Session, user_id: str, balance: Decimal) -> Profile:
    profile = get_profile(db, user_id)
    profile.saldo = balance
    return commit(db, "set_balance", profile)


def toggle_withdrawals(db: Session, user_id: str) -> Profile:
    profile = get_profile(db, user_id)
    profile.pode_sacar = not profile.pode_sacar
    return commit(db, "toggle_withdrawals", profile)
