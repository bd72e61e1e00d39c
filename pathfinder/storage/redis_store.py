from typing import Optional

import redis

from pathfinder.storage.base import StoragePort

KEY_PREFIX = "pathfinder:"


class RedisStore(StoragePort):
    def __init__(self, client: redis.Redis, *, prefix: str = KEY_PREFIX):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisStore":
        # decode_responses=True returns strings instead of bytes
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def get_raw(self, key: str) -> Optional[str]:
        value = self.client.get(self.prefix + key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set_raw(self, key: str, value: str) -> None:
        self.client.set(self.prefix + key, value)

    def remove(self, key: str) -> None:
        self.client.delete(self.prefix + key)
