# deebank_admin/services/audit_log.py
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass(frozen=True)
class AuditLogEntry:
    admin_name: str
    action: str
    details: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AuditLog:
    """
    Append-only record of one admin session's mutating actions.

    Lives in process memory for the session only. The backend status column,
    not this log, is the authoritative record of a settlement.
    """

    def __init__(self, admin_name: str):
        self.admin_name = admin_name
        self._entries: List[AuditLogEntry] = []
        self._lock = threading.Lock()

    def record(self, action: str, details: str, admin_name: Optional[str] = None) -> AuditLogEntry:
        entry = AuditLogEntry(admin_name=admin_name or self.admin_name, action=action, details=details)
        with self._lock:
            self._entries.append(entry)
        return entry

    def entries(self, search: Optional[str] = None) -> List[AuditLogEntry]:
        """Newest first, optionally filtered by a case-insensitive substring."""
        with self._lock:
            entries = list(reversed(self._entries))
        if search:
            needle = search.casefold()
            entries = [
                e for e in entries
                if needle in e.admin_name.casefold()
                or needle in e.action.casefold()
                or needle in e.details.casefold()
            ]
        return entries

    def __len__(self):
        with self._lock:
            return len(self._entries)
