from typing import Dict, Optional

from pathfinder.storage.base import StoragePort


class InMemoryStore(StoragePort):
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_raw(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
