# deebank_admin/api/deps.py
from enum import Enum

from fastapi import Depends

from deebank_admin.core.config import settings
from deebank_admin.core.i18n import t
from deebank_admin.core.security import AdminIdentity, get_current_admin
from deebank_admin.services.admin_session import AdminSession, sessions
from deebank_admin.services.audit_log import AuditLogEntry
from deebank_admin.services.status_mapper import Direction


class DirectionPath(str, Enum):
    deposits = "deposits"
    withdrawals = "withdrawals"

    @property
    def direction(self) -> Direction:
        return Direction.DEPOSIT if self is DirectionPath.deposits else Direction.WITHDRAWAL


def get_admin_session(admin: AdminIdentity = Depends(get_current_admin)) -> AdminSession:
    """Session of the calling admin; SessionNotStarted until /session/start."""
    return sessions.get(admin.subject)


def log_admin_action(session: AdminSession, action_key: str, **details) -> AuditLogEntry:
    """Append a back-office mutation to the session's audit trail"""
    lang = settings.AUDIT_LANGUAGE
    return session.audit_log.record(
        t(action_key, lang),
        t(f"{action_key}.details", lang, **details),
    )


def state_label(active: bool, lang: str) -> str:
    return t("state.active" if active else "state.inactive", lang)
