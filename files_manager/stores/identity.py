# files_manager/stores/identity.py
import redis


class RedisIdentityStore:
    """Session keys with a per-key expiry, kept in Redis."""

    def __init__(self, client: redis.Redis):
        self._redis = client

    def get(self, key: str) -> str | None:
        value = self._redis.get(key)
        if isinstance(value, bytes):
            value = value.decode()
        return value or None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._redis.setex(key, ttl_seconds, value)

    def delete(self, key: str) -> None:
        self._redis.delete(key)
