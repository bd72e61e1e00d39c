# pathfinder/storage/saved.py
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pathfinder.agents.schemas import Roadmap, SavedRoadmap
from pathfinder.storage.base import StoragePort

logger = logging.getLogger(__name__)

SAVED_ROADMAPS_KEY = "savedRoadmaps"


class SavedRoadmapRepository:
    """
    Saved roadmaps live in one JSON list. Every operation is scoped to the
    given user id; records owned by someone else are never listed, touched
    or deleted.
    """

    def __init__(self, store: StoragePort):
        self.store = store
        # read-modify-write of the shared list; routes call in from both
        # the event loop and the threadpool
        self._lock = threading.Lock()

    def _all(self) -> List[dict]:
        return self.store.get(SAVED_ROADMAPS_KEY, [])

    def _write(self, records: List[dict]) -> None:
        self.store.set(SAVED_ROADMAPS_KEY, records)

    def save(self, user_id: str, roadmap: Roadmap) -> SavedRoadmap:
        saved = SavedRoadmap(
            id=uuid.uuid4().hex,
            user_id=user_id,
            roadmap=roadmap,
            saved_at=datetime.now(timezone.utc),
        )
        with self._lock:
            records = self._all()
            records.append(saved.to_json_dict())
            self._write(records)
        logger.info("User %s saved roadmap %s (%s)", user_id, saved.id, roadmap.career_path)
        return saved

    def list_for_owner(self, user_id: str) -> List[SavedRoadmap]:
        records = self.store.list_by_owner(SAVED_ROADMAPS_KEY, user_id)
        return [SavedRoadmap.model_validate(r) for r in records]

    def get(self, saved_id: str, user_id: str) -> Optional[SavedRoadmap]:
        for r in self.store.list_by_owner(SAVED_ROADMAPS_KEY, user_id):
            if r.get("id") == saved_id:
                return SavedRoadmap.model_validate(r)
        return None

    def mark_viewed(self, saved_id: str, user_id: str) -> Optional[SavedRoadmap]:
        with self._lock:
            records = self._all()
            for i, r in enumerate(records):
                if r.get("id") == saved_id and r.get("userId") == user_id:
                    updated = SavedRoadmap.model_validate(r).model_copy(
                        update={"last_viewed": datetime.now(timezone.utc)}
                    )
                    records[i] = updated.to_json_dict()
                    self._write(records)
                    return updated
        return None

    def delete(self, saved_id: str, user_id: str) -> bool:
        with self._lock:
            records = self._all()
            kept = [r for r in records if not (r.get("id") == saved_id and r.get("userId") == user_id)]
            if len(kept) == len(records):
                logger.warning("User %s tried to delete unknown or foreign roadmap %s", user_id, saved_id)
                return False
            self._write(kept)
        return True
