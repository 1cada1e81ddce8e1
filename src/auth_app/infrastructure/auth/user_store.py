"""User Record Store

Purpose: Keep the last-known user profile for each session user id

Profiles are written on a successful login callback and read by /auth/me.
The store lives in process memory and is shared by every request handler,
so each read and each write happens under a single lock. The lock is never
held across an identity-provider call.

Retention policy:
- Entries expire ttl_seconds after their last write (0 disables expiry)
- At most max_entries entries are kept (0 disables the bound); writing a
  new key into a full store evicts the least recently written entry
"""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

UserProfile = Dict[str, Any]


class UserRecordStore:
    """Lock-guarded map of session user id -> user profile"""

    def __init__(
        self,
        ttl_seconds: int = 0,
        max_entries: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize user store

        Args:
            ttl_seconds: Lifetime of an entry after its last write (0 = forever)
            max_entries: Capacity bound (0 = unbounded)
            clock: Monotonic time source in seconds
        """
        if ttl_seconds < 0 or max_entries < 0:
            raise ValueError("ttl_seconds and max_entries must be >= 0")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # user_id -> (written_at, profile), oldest write first
        self._records: "OrderedDict[str, Tuple[float, UserProfile]]" = OrderedDict()

    def set(self, user_id: str, profile: UserProfile) -> None:
        """Create or replace the profile stored for user_id"""
        if not user_id:
            raise ValueError("user_id is required")

        with self._lock:
            now = self._clock()
            if user_id in self._records:
                self._records.move_to_end(user_id)
            elif self.max_entries and len(self._records) >= self.max_entries:
                self._purge_expired(now)
                while len(self._records) >= self.max_entries:
                    evicted_id, _ = self._records.popitem(last=False)
                    logger.info(f"User store full, evicted record for user {evicted_id}")
            self._records[user_id] = (now, profile)

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Return the profile for user_id, or None if absent or expired"""
        if not user_id:
            return None

        with self._lock:
            record = self._records.get(user_id)
            if record is None:
                return None

            written_at, profile = record
            if self._is_expired(written_at, self._clock()):
                del self._records[user_id]
                logger.debug(f"User record for {user_id} expired")
                return None

            return profile

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._records)

    def _is_expired(self, written_at: float, now: float) -> bool:
        return bool(self.ttl_seconds) and now - written_at >= self.ttl_seconds

    def _purge_expired(self, now: float) -> None:
        # Caller holds the lock; records are ordered by write time
        while self._records:
            user_id, (written_at, _) = next(iter(self._records.items()))
            if not self._is_expired(written_at, now):
                break
            del self._records[user_id]
