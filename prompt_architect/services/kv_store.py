"""
Key-value store adapter — JSON documents in Redis.

Every public operation catches transport failures, logs them and returns a
safe default (None / False / []), so callers treat "not found" and "store
unreachable" the same way. read() is the one strict exception: it raises
StoreError for the callers that need to tell the two apart.

Key layout:
    lead:{id}              → Lead JSON
    lead_email:{sha256}    → lead id (JSON string)
    ratelimit:{client_id}  → RateLimitEntry JSON
    analytics              → AnalyticsAggregate JSON
"""
import json
import logging
import time

import redis

logger = logging.getLogger('services.kv_store')

HEALTH_CHECK_KEY = 'health_check'


class StoreError(Exception):
    """Raised by strict reads when the store cannot be reached."""
    def __init__(self, key, cause=None):
        self.key = key
        self.cause = cause
        super().__init__(f"Key-value store unavailable while reading '{key}'")


def lead_key(lead_id):
    return f'lead:{lead_id}'


def lead_email_key(email_hash):
    return f'lead_email:{email_hash}'


def rate_limit_key(client_id):
    return f'ratelimit:{client_id}'


ANALYTICS_KEY = 'analytics'

RATE_LIMIT_PREFIX = 'ratelimit:'


class KeyValueStore:
    """
    Thin typed wrapper around a Redis client.

    Usage:
        store = KeyValueStore(redis.from_url(REDIS_URL, decode_responses=True))
        store.set('lead:abc', {'id': 'abc'})
        store.get('lead:abc')
    """

    def __init__(self, redis_client, max_update_attempts=5):
        self.redis = redis_client
        self.max_update_attempts = max_update_attempts

    # ── Reads ─────────────────────────────────────────────────────────

    def read(self, key):
        """Strict get: returns the decoded value or None, raises StoreError on transport failure."""
        try:
            raw = self.redis.get(key)
        except redis.RedisError as e:
            raise StoreError(key, e) from e
        return _decode(key, raw)

    def get(self, key):
        try:
            return self.read(key)
        except StoreError:
            logger.error("Store get failed for key %s", key, exc_info=True)
            return None

    def list_keys(self, prefix=''):
        """Return every key starting with prefix (SCAN, never KEYS)."""
        try:
            return sorted(self.redis.scan_iter(match=f'{prefix}*'))
        except redis.RedisError:
            logger.error("Store list failed for prefix %r", prefix, exc_info=True)
            return []

    # ── Writes ────────────────────────────────────────────────────────

    def set(self, key, value):
        try:
            self.redis.set(key, json.dumps(value))
            return True
        except (redis.RedisError, TypeError, ValueError):
            logger.error("Store set failed for key %s", key, exc_info=True)
            return False

    def set_many(self, mapping):
        """Write several keys in a single MULTI/EXEC transaction."""
        try:
            pipe = self.redis.pipeline(transaction=True)
            for key, value in mapping.items():
                pipe.set(key, json.dumps(value))
            pipe.execute()
            return True
        except (redis.RedisError, TypeError, ValueError):
            logger.error("Store set_many failed for keys %s", list(mapping), exc_info=True)
            return False

    def delete(self, key):
        try:
            self.redis.delete(key)
            return True
        except redis.RedisError:
            logger.error("Store delete failed for key %s", key, exc_info=True)
            return False

    def update(self, key, mutate, default=None):
        """
        Optimistic read-modify-write on a single key.

        WATCHes the key, applies mutate(current) and commits with MULTI/EXEC;
        a concurrent writer aborts the commit and the whole step is retried,
        up to max_update_attempts times.
        mutate receives the decoded value (or default() when the key is
        absent) and returns the value to store, or None to skip the write.

        Returns the stored value, or None if nothing was written.
        """
        try:
            with self.redis.pipeline(transaction=True) as pipe:
                for attempt in range(1, self.max_update_attempts + 1):
                    try:
                        pipe.watch(key)
                        current = _decode(key, pipe.get(key))
                        if current is None and default is not None:
                            current = default()
                        new_value = mutate(current)
                        if new_value is None:
                            pipe.reset()
                            return None
                        pipe.multi()
                        pipe.set(key, json.dumps(new_value))
                        pipe.execute()
                        return new_value
                    except redis.WatchError:
                        logger.debug("Update conflict on %s (attempt %d)", key, attempt)
        except (redis.RedisError, TypeError, ValueError):
            logger.error("Store update failed for key %s", key, exc_info=True)
            return None
        logger.warning("Update of %s gave up after %d conflicts", key, self.max_update_attempts)
        return None

    # ── Health ────────────────────────────────────────────────────────

    def health_check(self):
        """Round-trip a timestamp through the store."""
        stamp = int(time.time() * 1000)
        if not self.set(HEALTH_CHECK_KEY, stamp):
            return False
        return self.get(HEALTH_CHECK_KEY) is not None


def _decode(key, raw):
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding undecodable value at key %s", key)
        return None
