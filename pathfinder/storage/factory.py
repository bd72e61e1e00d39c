import logging

from pathfinder.settings import Settings
from pathfinder.storage.base import StoragePort
from pathfinder.storage.json_file import JsonFileStore
from pathfinder.storage.redis_store import RedisStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> StoragePort:
    if settings.redis_url:
        logger.info("Using Redis store")
        return RedisStore.from_url(settings.redis_url)
    logger.info("Using JSON file store at %s", settings.storage_path)
    return JsonFileStore(settings.storage_path)
