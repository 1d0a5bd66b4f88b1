# deebank_admin/crud/dashboard.py
"""Aggregate figures for the dashboard and the user detail page."""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.crud.base import backend_failure
from deebank_admin.crud.product import ACTIVE
from deebank_admin.models.deposit import Deposit
from deebank_admin.models.product import Product
from deebank_admin.models.profile import Profile
from deebank_admin.models.withdrawal import Withdrawal
from deebank_admin.services.status_mapper import (
    Direction,
    NormalizedStatus,
    normalize,
    recognized_statuses,
)
from deebank_admin.utils.dates import local_day_bounds, to_local, utcnow


def raw_statuses_meaning(direction: Direction, status: NormalizedStatus) -> List[str]:
    """Every raw literal of `direction` that normalizes to `status`."""
    return [raw for raw in recognized_statuses(direction) if normalize(raw, direction) == status]


def _settled_deposit(extra=None):
    stmt = select(func.coalesce(func.sum(Deposit.valor), 0)).where(
        func.lower(func.trim(Deposit.estado)).in_(raw_statuses_meaning(Direction.DEPOSIT, NormalizedStatus.SETTLED))
    )
    if extra is not None:
        stmt = stmt.where(extra)
    return stmt


def local_today() -> date:
    return to_local(utcnow()).date()


def dashboard_stats(db: Session, day: Optional[date] = None) -> dict:
    day = day or local_today()
    start, end = local_day_bounds(day)
    try:
        total_users = db.execute(select(func.count(Profile.id))).scalar_one()
        withdrawals_today = db.execute(
            select(func.coalesce(func.sum(Withdrawal.valor), 0)).where(
                Withdrawal.created_at >= start, Withdrawal.created_at <= end
            )
        ).scalar_one()
        settled_deposits = db.execute(_settled_deposit()).scalar_one()
        active_products = db.execute(
            select(func.count(Product.id)).where(func.upper(Product.estado) == ACTIVE)
        ).scalar_one()
    except SQLAlchemyError as e:
        backend_failure(db, "dashboard_stats", e)

    return {
        "total_users": total_users,
        "withdrawals_today": Decimal(str(withdrawals_today)),
        "settled_deposits_total": Decimal(str(settled_deposits)),
        "active_products": active_products,
        "day": day,
    }


def user_totals(db: Session, user_id: str) -> dict:
    try:
        total_deposited = db.execute(_settled_deposit(Deposit.user_id == user_id)).scalar_one()
        deposits = db.execute(
            select(func.count(Deposit.id)).where(Deposit.user_id == user_id)
        ).scalar_one()
        withdrawals = db.execute(
            select(func.count(Withdrawal.id)).where(Withdrawal.user_id == user_id)
        ).scalar_one()
    except SQLAlchemyError as e:
        backend_failure(db, "user_totals", e)

    return {
        "total_deposited": Decimal(str(total_deposited)),
        "deposits": deposits,
        "withdrawals": withdrawals,
    }
