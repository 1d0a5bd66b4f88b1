# deebank_admin/api/session.py
from fastapi import APIRouter, Depends, Request

from deebank_admin.core.i18n import request_language, t
from deebank_admin.core.security import AdminIdentity, get_current_admin
from deebank_admin.schemas.admin import AdminSessionOut
from deebank_admin.services.admin_session import sessions

router = APIRouter(prefix="/session", tags=["Session"])


@router.post("/start", response_model=AdminSessionOut)
def start_session(admin: AdminIdentity = Depends(get_current_admin)):
    """Open (or reopen) the admin's session with an empty audit log."""
    session = sessions.start(admin)
    return AdminSessionOut(
        subject=admin.subject,
        admin_name=admin.name,
        started_at=session.started_at,
        audit_entries=len(session.audit_log),
    )


@router.post("/end")
def end_session(request: Request, admin: AdminIdentity = Depends(get_current_admin)):
    sessions.end(admin.subject)
    return {"message": t("session.ended", request_language(request))}
