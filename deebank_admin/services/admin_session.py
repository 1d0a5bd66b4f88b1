# deebank_admin/services/admin_session.py
"""
Per-admin working context: audit log, recent activity feeds and the
transaction currently shown on the review screen.
"""
import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from deebank_admin.core.security import AdminIdentity
from deebank_admin.schemas.transaction import TransactionView
from deebank_admin.services.activity_feed import RecentActivityFeed
from deebank_admin.services.audit_log import AuditLog
from deebank_admin.services.errors import SessionNotStarted, StaleSearchContext
from deebank_admin.services.status_mapper import Direction, normalize

logger = logging.getLogger(__name__)


class AdminSession:
    def __init__(self, identity: AdminIdentity):
        self.identity = identity
        self.started_at = datetime.now(timezone.utc)
        self.audit_log = AuditLog(identity.name)
        self.feeds: Dict[Direction, RecentActivityFeed] = {
            direction: RecentActivityFeed(direction) for direction in Direction
        }
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._search_token = 0
        self._displayed: Optional[TransactionView] = None

    # ---------------- Search context ---------------- #
    def begin_search(self) -> int:
        """Start a search; any response for an earlier token is discarded."""
        with self._lock:
            self._search_token = next(self._tokens)
            self._displayed = None
            return self._search_token

    def complete_search(self, token: int, result: Optional[TransactionView]) -> bool:
        """Show `result` unless a newer search started meanwhile. Returns whether it was applied."""
        with self._lock:
            if token != self._search_token:
                logger.debug(f"Dropping result of superseded search {token} (current {self._search_token})")
                return False
            self._displayed = result
            return True

    @property
    def search_token(self) -> int:
        return self._search_token

    @property
    def displayed(self) -> Optional[TransactionView]:
        return self._displayed

    def check_settle_context(self, token: int, transaction_id: str) -> TransactionView:
        """The displayed transaction, if the settle request refers to it."""
        with self._lock:
            shown = self._displayed
            if token != self._search_token or shown is None or shown.id != transaction_id:
                raise StaleSearchContext(
                    f"Transaction {transaction_id} is not the one on screen", id=transaction_id
                )
            return shown

    def apply_settlement(self, transaction_id: str, new_status: str):
        """Reflect an acknowledged settlement on the displayed transaction."""
        with self._lock:
            shown = self._displayed
            if shown is None or shown.id != transaction_id:
                return
            self._displayed = shown.model_copy(
                update={"raw_status": new_status, "status": normalize(new_status, shown.direction)}
            )

    def feed(self, direction: Direction) -> RecentActivityFeed:
        return self.feeds[Direction(direction)]

    def close(self):
        for feed in self.feeds.values():
            feed.close()


class SessionRegistry:
    """Admin sessions keyed by token subject."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, AdminSession] = {}

    def start(self, identity: AdminIdentity) -> AdminSession:
        with self._lock:
            previous = self._sessions.pop(identity.subject, None)
            session = AdminSession(identity)
            self._sessions[identity.subject] = session
        if previous:
            previous.close()
        logger.info(f"Admin session started for {identity.name} ({identity.subject})")
        return session

    def get(self, subject: str) -> AdminSession:
        with self._lock:
            session = self._sessions.get(subject)
        if session is None:
            raise SessionNotStarted(f"No session for {subject}", subject=subject)
        return session

    def end(self, subject: str) -> Optional[AdminSession]:
        with self._lock:
            session = self._sessions.pop(subject, None)
        if session:
            session.close()
            logger.info(f"Admin session ended for {session.identity.name} ({subject})")
        return session

    def clear(self):
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()

    def __len__(self):
        with self._lock:
            return len(self._sessions)


sessions = SessionRegistry()
