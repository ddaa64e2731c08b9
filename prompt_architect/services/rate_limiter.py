"""
Sliding 24-hour message quota per client, stored in the key-value store.

Entry states (per client id):
  - no entry            → created with count 0, allowed
  - within window       → allowed while count < limit
  - window expired      → count reset to 0, window restarted, allowed
  - unlimited           → email captured, always allowed

check() and increment() are two separate round trips. Two concurrent requests
from one client can both pass check() before either increments, so the
effective limit can be exceeded by the degree of concurrency. increment()
itself is an optimistic WATCH/MULTI update, so no increment is lost.

If the store cannot be read, fail_open decides: allow without touching state
(default), or deny with reason='store_unavailable'.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

from prompt_architect.models.rate_limit import RateLimitEntry
from prompt_architect.services.kv_store import StoreError, rate_limit_key, RATE_LIMIT_PREFIX
from prompt_architect.validation.email import hash_email

logger = logging.getLogger('services.rate_limiter')

DEFAULT_WINDOW_MS = 24 * 60 * 60 * 1000
STORE_UNAVAILABLE = 'store_unavailable'


def now_ms():
    return int(time.time() * 1000)


@dataclass
class RateLimitResult:
    allowed: bool
    current_count: int
    limit: int
    resets_at: int
    unlimited: bool = False
    reason: Optional[str] = None

    def to_info(self):
        return {
            'currentCount': self.current_count,
            'limit': self.limit,
            'resetsAt': self.resets_at,
        }


def client_ip_from(headers, remote_addr=None):
    """First X-Forwarded-For hop, then X-Real-IP, then the socket address."""
    forwarded = headers.get('X-Forwarded-For')
    if forwarded:
        first = forwarded.split(',')[0].strip()
        if first:
            return first
    real_ip = headers.get('X-Real-IP')
    if real_ip:
        return real_ip.strip()
    return remote_addr or 'unknown-client'


class RateLimiter:

    def __init__(self, store, limit=3, window_ms=DEFAULT_WINDOW_MS, fail_open=True, clock=now_ms):
        self.store = store
        self.limit = limit
        self.window_ms = window_ms
        self.fail_open = fail_open
        self.clock = clock

    def check(self, client_id, email=None, exempt=False) -> RateLimitResult:
        """
        Decide whether client_id may send another message.

        exempt requests (the intake flow) are always allowed and never touch
        state. Supplying an email upgrades the entry to unlimited in place.
        """
        now = self.clock()

        if exempt:
            return RateLimitResult(True, 0, self.limit, now + self.window_ms)

        key = rate_limit_key(client_id)
        try:
            data = self.store.read(key)
        except StoreError:
            return self._store_unavailable(client_id, now)

        entry = RateLimitEntry.from_dict(data) if data else None

        if email:
            if entry is None:
                entry = RateLimitEntry.new(client_id, now)
            entry.attach_email(hash_email(email))
            self.store.set(key, entry.to_dict())
            logger.info("Client %s upgraded to unlimited", client_id)
            return self._result(entry, allowed=True)

        if entry is None:
            entry = RateLimitEntry.new(client_id, now)
            self.store.set(key, entry.to_dict())
            return self._result(entry, allowed=True)

        if entry.is_unlimited:
            return self._result(entry, allowed=True)

        if entry.window_expired(now, self.window_ms):
            entry.reset_window(now)
            self.store.set(key, entry.to_dict())
            return self._result(entry, allowed=True)

        allowed = entry.count < self.limit
        if not allowed:
            logger.info("Client %s over limit (%d/%d)", client_id, entry.count, self.limit)
        return self._result(entry, allowed=allowed)

    def increment(self, client_id, exempt=False):
        """Count one accepted message. Call only after the request succeeded."""
        if exempt:
            return None

        now = self.clock()

        def _bump(current):
            if current is None:
                # check() normally creates the entry first
                return RateLimitEntry.new(client_id, now, count=1).to_dict()
            entry = RateLimitEntry.from_dict(current)
            entry.count += 1
            return entry.to_dict()

        stored = self.store.update(rate_limit_key(client_id), _bump)
        if stored is None:
            logger.warning("Rate limit increment not stored for %s", client_id)
            return None
        return RateLimitEntry.from_dict(stored)

    def stats(self):
        """Number of tracked clients and their average message count."""
        counts = []
        for key in self.store.list_keys(RATE_LIMIT_PREFIX):
            data = self.store.get(key)
            if data:
                counts.append(data.get('count', 0))
        return {
            'totalClients': len(counts),
            'averageUsage': (sum(counts) / len(counts)) if counts else 0,
        }

    # ── helpers ───────────────────────────────────────────────────────

    def _result(self, entry, allowed):
        return RateLimitResult(
            allowed=allowed,
            current_count=entry.count,
            limit=self.limit,
            resets_at=entry.window_start + self.window_ms,
            unlimited=entry.is_unlimited,
        )

    def _store_unavailable(self, client_id, now):
        if self.fail_open:
            logger.warning("Rate limit store unavailable for %s — failing open", client_id)
            return RateLimitResult(True, 0, self.limit, now + self.window_ms, reason=STORE_UNAVAILABLE)
        logger.warning("Rate limit store unavailable for %s — failing closed", client_id)
        return RateLimitResult(False, 0, self.limit, now + self.window_ms, reason=STORE_UNAVAILABLE)
