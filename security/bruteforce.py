"""
Per-username login lockout.

State lives in process memory only: a restart clears every counter and
lock. A lapsed lock keeps its failure count, so the next wrong password
locks the account again; only a successful login clears the record.
Records idle for longer than the retention window are swept, and the
map is capped so that failures for random usernames cannot grow it
without bound.
"""
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from flask import current_app


@dataclass
class AttemptRecord:
    count: int = 0
    lock_until: Optional[float] = None
    last_failure: float = 0.0

    def is_locked(self, now: float) -> bool:
        return self.lock_until is not None and self.lock_until > now


class LoginAttemptTracker:
    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.time,
        retention_seconds: float = 24 * 3600,
        max_records: int = 10000,
    ):
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.clock = clock
        self.retention_seconds = retention_seconds
        self.max_records = max_records
        self._records: Dict[str, AttemptRecord] = {}
        self._lock = threading.Lock()
        self._next_sweep = 0.0

    def check_locked(self, username: str) -> Tuple[bool, int]:
        """
        Returns (locked, seconds_remaining)
        """
        with self._lock:
            record = self._records.get(username)
            if not record or record.lock_until is None:
                return False, 0

            remaining = record.lock_until - self.clock()
            if remaining <= 0:
                return False, 0
            return True, max(int(math.ceil(remaining)), 1)

    def record_failure(self, username: str) -> Tuple[int, bool]:
        """
        Increments failure counter. Returns (fail_count, locked_now)
        """
        with self._lock:
            now = self.clock()
            record = self._records.get(username)
            if record is None:
                self._prune(now)
                record = self._records[username] = AttemptRecord()

            record.count += 1
            record.last_failure = now
            locked_now = False
            if record.count >= self.max_attempts:
                record.lock_until = now + self.lockout_seconds
                locked_now = True
            return record.count, locked_now

    def reset(self, username: str) -> None:
        with self._lock:
            self._records.pop(username, None)

    def failure_count(self, username: str) -> int:
        with self._lock:
            record = self._records.get(username)
            return record.count if record else 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _prune(self, now: float) -> None:
        # caller holds self._lock
        if now >= self._next_sweep:
            self._next_sweep = now + self.lockout_seconds
            cutoff = now - self.retention_seconds
            stale = [
                name for name, r in self._records.items()
                if r.last_failure <= cutoff and not r.is_locked(now)
            ]
            for name in stale:
                del self._records[name]

        overflow = len(self._records) - self.max_records + 1
        if overflow > 0:
            # oldest unlocked records go first; active locks are kept
            candidates = sorted(
                (r.last_failure, name) for name, r in self._records.items()
                if not r.is_locked(now)
            )
            for _, name in candidates[:overflow]:
                del self._records[name]


def get_tracker() -> LoginAttemptTracker:
    return current_app.extensions["login_attempts"]


def is_locked(username: str) -> Tuple[bool, int]:
    return get_tracker().check_locked(username)


def register_failure(username: str) -> Tuple[int, bool]:
    return get_tracker().record_failure(username)


def reset_attempts(username: str) -> None:
    """
    Clears failure counter after successful login.
    """
    get_tracker().reset(username)
