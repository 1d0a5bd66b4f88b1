# deebank_admin/services/activity_feed.py
import logging
import threading
from typing import Iterator, List, Optional

from deebank_admin.core.config import settings
from deebank_admin.schemas.transaction import TransactionView
from deebank_admin.services.backend import RESOURCES, BackendDataService
from deebank_admin.services.change_feed import change_feed
from deebank_admin.services.errors import InvalidStatusTransition
from deebank_admin.services.status_mapper import Direction, canonical_status
from deebank_admin.services.transaction_locator import deposit_view, withdrawal_view

logger = logging.getLogger(__name__)

ALL_STATUSES = "ALL"


def resolve_filter(status_filter: Optional[str], direction: Direction) -> Optional[str]:
    """Raw literal to filter on, or None for no status predicate."""
    if not status_filter or status_filter.strip().upper() == ALL_STATUSES:
        return None
    raw = canonical_status(status_filter, direction)
    if raw is None:
        raise InvalidStatusTransition(f"Unknown status filter {status_filter!r}", status=status_filter)
    return raw


def clamp_limit(limit: Optional[int]) -> int:
    if not limit or limit < 1:
        return settings.RECENT_ACTIVITY_LIMIT
    return min(limit, settings.MAX_RECENT_ACTIVITY_LIMIT)


def list_recent(
    backend: BackendDataService,
    direction: Direction,
    status_filter: Optional[str] = ALL_STATUSES,
    limit: Optional[int] = None,
) -> List[TransactionView]:
    """Most recent transactions of one direction, newest first, with user names joined in."""
    direction = Direction(direction)
    rows = backend.recent(direction, resolve_filter(status_filter, direction), clamp_limit(limit))
    profiles = backend.get_profiles(row.user_id for row in rows)

    to_view = deposit_view if direction == Direction.DEPOSIT else withdrawal_view
    return [to_view(row, profiles.get(row.user_id)) for row in rows]


class RecentActivityFeed:
    """
    Recent transactions of one direction that follow backend changes.

    A change notification only marks the feed stale; the next read re-queries
    the whole list. Closing the feed cancels the subscription.
    """

    def __init__(self, direction: Direction, status_filter: str = ALL_STATUSES, limit: Optional[int] = None):
        self.direction = Direction(direction)
        self.status_filter = status_filter
        self.limit = clamp_limit(limit)
        self._rows: List[TransactionView] = []
        self._stale = True
        self._lock = threading.Lock()

        model, _ = RESOURCES[self.direction]
        self._unsubscribe = change_feed.subscribe(model.__tablename__, self._on_change)

    def _on_change(self, table: str):
        logger.debug(f"{table} changed, {self.direction.value} feed marked stale")
        self.invalidate()

    @property
    def stale(self) -> bool:
        return self._stale

    def invalidate(self):
        with self._lock:
            self._stale = True

    def set_filter(self, status_filter: Optional[str] = ALL_STATUSES, limit: Optional[int] = None):
        resolve_filter(status_filter, self.direction)
        with self._lock:
            new_filter = status_filter or ALL_STATUSES
            new_limit = clamp_limit(limit) if limit is not None else self.limit
            if new_filter != self.status_filter or new_limit != self.limit:
                self.status_filter = new_filter
                self.limit = new_limit
                self._stale = True

    def results(self, backend: BackendDataService) -> List[TransactionView]:
        with self._lock:
            if not self._stale:
                return list(self._rows)
            status_filter, limit = self.status_filter, self.limit
            # cleared before the query so a change arriving mid-query is not lost
            self._stale = False
        try:
            rows = list_recent(backend, self.direction, status_filter, limit)
        except Exception:
            self.invalidate()
            raise
        with self._lock:
            self._rows = rows
        return list(rows)

    def refresh(self, backend: BackendDataService) -> List[TransactionView]:
        self.invalidate()
        return self.results(backend)

    def __iter__(self) -> Iterator[TransactionView]:
        with self._lock:
            return iter(list(self._rows))

    def close(self):
        self._unsubscribe()
