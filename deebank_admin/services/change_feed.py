# deebank_admin/services/change_feed.py
"""
Change notifications for the transaction tables.

Rows of watched tables that a session inserts, updates or deletes are
collected at flush time and published once the transaction commits; a
rollback discards them. Subscribers learn only which table changed, never
what changed, and are expected to re-query.
"""
import logging
import threading
from typing import Callable, Dict, List

from sqlalchemy import event
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

Callback = Callable[[str], None]

_PENDING_KEY = "deebank_changed_tables"


class ChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Callback]] = {}

    def subscribe(self, table: str, callback: Callback) -> Callable[[], None]:
        """Register `callback` for `table`; returns the matching unsubscribe."""
        with self._lock:
            self._subscribers.setdefault(table, []).append(callback)

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(table, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))

    def publish(self, table: str) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(table, []))
        for callback in callbacks:
            try:
                callback(table)
            except Exception:
                logger.exception(f"Change subscriber failed for table {table}")


change_feed = ChangeFeed()

WATCHED_TABLES = {"depositos", "retiradas"}


def _table_of(instance) -> str:
    return getattr(instance, "__tablename__", "")


@event.listens_for(Session, "after_flush")
def _collect_changes(session, flush_context):
    changed = session.info.setdefault(_PENDING_KEY, set())
    for instance in list(session.new) + list(session.dirty) + list(session.deleted):
        table = _table_of(instance)
        if table in WATCHED_TABLES:
            changed.add(table)


def mark_changed(session: Session, table: str) -> None:
    """Record a change made with a Core UPDATE/DELETE, which bypasses flush."""
    if table in WATCHED_TABLES:
        session.info.setdefault(_PENDING_KEY, set()).add(table)


@event.listens_for(Session, "after_commit")
def _publish_changes(session):
    changed = session.info.pop(_PENDING_KEY, set())
    for table in sorted(changed):
        change_feed.publish(table)


@event.listens_for(Session, "after_rollback")
def _discard_changes(session):
    session.info.pop(_PENDING_KEY, None)
