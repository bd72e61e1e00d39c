# pathfinder/storage/json_file.py
import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional

from pathfinder.storage.base import StoragePort

logger = logging.getLogger(__name__)


class JsonFileStore(StoragePort):
    """One JSON object on disk mapping key -> serialized value."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        # atomic on POSIX and Windows
        os.replace(tmp, self.path)

    def get_raw(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_raw(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._dump(data)
                logger.debug("Removed %s from %s", key, self.path)
