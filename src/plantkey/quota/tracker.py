"""Daily usage quota for Observe trait answers.

Free users may record a fixed number of trait answers per local calendar day. The window
is a (date stamp, count) pair persisted in a key-value store; a new day is detected by
comparing the stamp with the injected clock.
"""

import datetime
import logging
import threading
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from plantkey.quota.entitlements import EntitlementGate
from plantkey.quota.stores import KeyValueStore, QuotaStoreError

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 3
DEFAULT_COUNT_KEY = "observe_answers_today"
DEFAULT_DATE_KEY = "observe_answers_date"


class QuotaOutcome(str, Enum):
    """Result of attempting to record an answer."""

    SUCCESS = "success"
    DENIED = "denied"


class QuotaStatus(BaseModel):
    """Snapshot of the current quota window."""

    date: datetime.date
    count: int
    limit: int
    remaining: int | None  # None when unlimited
    unlimited: bool

    @property
    def upgrade_required(self) -> bool:
        return not self.unlimited and self.remaining == 0


class QuotaTracker:
    """Count trait answers per day and deny them beyond the free limit."""

    def __init__(
        self,
        store: KeyValueStore,
        entitlements: EntitlementGate,
        clock: Callable[[], datetime.date] = datetime.date.today,
        limit: int = DEFAULT_DAILY_LIMIT,
        count_key: str = DEFAULT_COUNT_KEY,
        date_key: str = DEFAULT_DATE_KEY,
    ):
        """Initialize the tracker.

        Args:
            store: Persistence for the count and date stamp
            entitlements: Gate deciding whether the limit applies
            clock: Returns the current local date
            limit: Answers allowed per day for non-entitled users
            count_key: Store key for the answer count
            date_key: Store key for the ISO date stamp
        """
        self.store = store
        self.entitlements = entitlements
        self.clock = clock
        self.limit = limit
        self.count_key = count_key
        self.date_key = date_key
        self._lock = threading.Lock()

    def _refresh_window(self, today: datetime.date) -> int:
        """Read the count for today, resetting the window on a new day.

        Must be called with the lock held.
        """
        stamp = self.store.get(self.date_key)
        if stamp != today.isoformat():
            self.store.set(self.count_key, "0")
            self.store.set(self.date_key, today.isoformat())
            if stamp is not None:
                logger.debug("Quota window rolled over from %s to %s", stamp, today)
            return 0

        raw_count = self.store.get(self.count_key)
        try:
            return max(0, int(raw_count or 0))
        except ValueError:
            logger.warning("Ignoring malformed quota count %r", raw_count)
            return 0

    def current_count(self) -> int:
        """Get the number of answers recorded today.

        Store failures are logged and reported as zero usage.
        """
        with self._lock:
            try:
                return self._refresh_window(self.clock())
            except QuotaStoreError as e:
                logger.warning("Quota store unavailable, treating usage as zero: %s", e)
                return 0

    def record_answer(self) -> QuotaOutcome:
        """Attempt to consume one answer from today's allowance.

        Returns:
            SUCCESS when the answer may be applied, DENIED when the limit is reached.
            Entitled users always succeed and never touch the counter.
        """
        if self.entitlements.has_unlimited_matching():
            return QuotaOutcome.SUCCESS

        with self._lock:
            try:
                count = self._refresh_window(self.clock())
                if count >= self.limit:
                    logger.debug("Quota denied: %d of %d answers used", count, self.limit)
                    return QuotaOutcome.DENIED

                self.store.set(self.count_key, str(count + 1))
                logger.debug("Quota answer recorded: %d of %d", count + 1, self.limit)
                return QuotaOutcome.SUCCESS
            except QuotaStoreError as e:
                logger.warning("Quota store unavailable, allowing answer: %s", e)
                return QuotaOutcome.SUCCESS

    def remaining(self) -> int | None:
        """Get answers left today, or None when unlimited."""
        if self.entitlements.has_unlimited_matching():
            return None
        return max(0, self.limit - self.current_count())

    def status(self) -> QuotaStatus:
        """Get a snapshot of the quota window."""
        unlimited = self.entitlements.has_unlimited_matching()
        count = self.current_count()
        return QuotaStatus(
            date=self.clock(),
            count=count,
            limit=self.limit,
            remaining=None if unlimited else max(0, self.limit - count),
            unlimited=unlimited,
        )
