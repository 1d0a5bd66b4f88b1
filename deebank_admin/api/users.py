# deebank_admin/api/users.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from deebank_admin.api.deps import get_admin_session, log_admin_action
from deebank_admin.core.config import settings
from deebank_admin.core.i18n import request_language, t
from deebank_admin.crud import profile as crud
from deebank_admin.crud.dashboard import user_totals
from deebank_admin.db import get_db
from deebank_admin.schemas.admin import BalanceUpdate, UserDetail, UserListResponse
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/users", tags=["Users"])


def withdrawal_label(enabled: bool, lang: str) -> str:
    return t("state.enabled" if enabled else "state.blocked", lang)


@router.get("", response_model=UserListResponse)
def get_users(
    search: Optional[str] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(100, ge=1, le=500),
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    users = [p.to_dict() for p in crud.list_profiles(db, search=search, on_date=on_date, limit=limit)]
    return UserListResponse(users=users, count=len(users))


@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: str,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    profile = crud.get_profile(db, user_id)
    return UserDetail(user=profile.to_dict(), **user_totals(db, user_id))


@router.put("/{user_id}/balance")
def update_balance(
    user_id: str,
    body: BalanceUpdate,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    """Overwrite the customer's balance; audited with the new value"""
    profile = crud.get_profile(db, user_id)
    previous = profile.saldo
    profile = crud.set_balance(db, user_id, body.balance)
    log_admin_action(
        session, "audit.user.balance",
        phone=profile.phone, old=previous, value=profile.saldo,
    )
    return {"message": t("user.balance.saved", request_language(request)), "user": profile.to_dict()}


@router.post("/{user_id}/withdrawals/toggle")
def toggle_withdrawals(
    user_id: str,
    request: Request,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db),
):
    profile = crud.toggle_withdrawals(db, user_id)
    log_admin_action(
        session,
        "audit.user.withdrawals",
        phone=profile.phone, state=withdrawal_label(profile.pode_sacar, settings.AUDIT_LANGUAGE),
    )
    lang = request_language(request)
    return {
        "message": t("user.withdrawals.toggled", lang, state=withdrawal_label(profile.pode_sacar, lang)),
        "user": profile.to_dict(),
    }
