# deebank_admin/services/backend.py
"""
Access to the platform's backend tables.

Every call is a single point query or write. Failures are rolled back,
logged and raised as BackendUnavailable; empty results are not failures.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.db.session import get_db
from deebank_admin.models.deposit import Deposit
from deebank_admin.models.profile import Profile
from deebank_admin.models.withdrawal import Withdrawal
from deebank_admin.services.change_feed import mark_changed
from deebank_admin.services.errors import BackendUnavailable
from deebank_admin.services.status_mapper import Direction

logger = logging.getLogger(__name__)

DateWindow = Optional[Tuple[datetime, datetime]]

# Row model and raw status column per direction
RESOURCES = {
    Direction.DEPOSIT: (Deposit, Deposit.estado),
    Direction.WITHDRAWAL: (Withdrawal, Withdrawal.status),
}


class BackendDataService:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, operation: str, exc: Exception):
        self.db.rollback()
        logger.error(f"Backend call '{operation}' failed: {exc}")
        raise BackendUnavailable(str(exc), operation=operation) from exc

    # ---------------- Reads ---------------- #
    def find_profile_by_phone(self, phone: str) -> Optional[Profile]:
        try:
            return self.db.execute(
                select(Profile).where(Profile.phone == phone)
            ).scalars().first()
        except SQLAlchemyError as e:
            self._fail("find_profile_by_phone", e)

    def get_profiles(self, user_ids) -> dict:
        ids = {uid for uid in user_ids if uid}
        if not ids:
            return {}
        try:
            rows = self.db.execute(
                select(Profile).where(Profile.id.in_(ids))
            ).scalars().all()
        except SQLAlchemyError as e:
            self._fail("get_profiles", e)
        return {p.id: p for p in rows}

    def latest_deposit(self, user_id: str, raw_status: str, window: DateWindow = None) -> Optional[Deposit]:
        stmt = select(Deposit).where(
            Deposit.user_id == user_id,
            Deposit.estado == raw_status,
        )
        if window:
            stmt = stmt.where(Deposit.created_at >= window[0], Deposit.created_at <= window[1])
        stmt = stmt.order_by(Deposit.created_at.desc()).limit(1)
        try:
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            self._fail("latest_deposit", e)

    def latest_withdrawal(self, phone: str, raw_status: str, window: DateWindow = None) -> Optional[Withdrawal]:
        stmt = select(Withdrawal).where(
            Withdrawal.telefone == phone,
            Withdrawal.status == raw_status,
        )
        if window:
            stmt = stmt.where(Withdrawal.created_at >= window[0], Withdrawal.created_at <= window[1])
        stmt = stmt.order_by(Withdrawal.created_at.desc()).limit(1)
        try:
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            self._fail("latest_withdrawal", e)

    def recent(self, direction: Direction, raw_status: Optional[str], limit: int) -> List:
        """Most recent rows of a direction, newest first; no status predicate when raw_status is None."""
        model, status_column = RESOURCES[Direction(direction)]
        stmt = select(model)
        if raw_status is not None:
            stmt = stmt.where(status_column == raw_status)
        stmt = stmt.order_by(model.created_at.desc()).limit(limit)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            self._fail("recent", e)

    # ---------------- Writes ---------------- #
    def set_status(self, direction: Direction, record_id: str, new_status: str,
                   expected_status: Optional[str] = None) -> bool:
        """
        Set the raw status column of one record.

        With `expected_status` the update only applies while the row still
        holds that value. Returns False when no row was updated.
        """
        model, status_column = RESOURCES[Direction(direction)]
        stmt = update(model).where(model.id == record_id)
        if expected_status is not None:
            stmt = stmt.where(status_column == expected_status)
        stmt = stmt.values({status_column.key: new_status}).execution_options(synchronize_session=False)
        try:
            result = self.db.execute(stmt)
            if result.rowcount:
                mark_changed(self.db, model.__tablename__)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("set_status", e)
        return bool(result.rowcount)

    def record_exists(self, direction: Direction, record_id: str) -> bool:
        model, _ = RESOURCES[Direction(direction)]
        try:
            return self.db.execute(
                select(model.id).where(model.id == record_id)
            ).first() is not None
        except SQLAlchemyError as e:
            self._fail("record_exists", e)


def get_backend(db: Session = Depends(get_db)) -> BackendDataService:
    return BackendDataService(db)
