# deebank_admin/api/audit.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from deebank_admin.api.deps import get_admin_session
from deebank_admin.schemas.admin import AuditLogEntryOut
from deebank_admin.services.admin_session import AdminSession

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=List[AuditLogEntryOut])
def get_audit_logs(
    search: Optional[str] = None,
    session: AdminSession = Depends(get_admin_session),
):
    """This session's audit trail, newest first"""
    return session.audit_log.entries(search)
