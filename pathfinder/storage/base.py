## Storage port: a flat key-value store holding JSON values
import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional


class StoragePort(ABC):
    """
    Anything that can get/set/remove text by key. Values go in and come out
    as JSON-compatible Python objects; adapters only see strings.
    """

    @abstractmethod
    def get_raw(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set_raw(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, key: str) -> None:
        raise NotImplementedError

    def get(self, key: str, default: Any = None) -> Any:
        raw = self.get_raw(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self.set_raw(key, json.dumps(value))

    def list_by_owner(self, key: str, owner_id: str) -> List[dict]:
        """Records of the JSON list at `key` whose userId is `owner_id`."""
        return [r for r in self.get(key, []) if r.get("userId") == owner_id]
