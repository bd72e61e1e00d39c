import json

import pytest

from pathfinder.settings import Settings
from pathfinder.storage.factory import build_store
from pathfinder.storage.json_file import JsonFileStore
from pathfinder.storage.memory import InMemoryStore
from pathfinder.storage.redis_store import RedisStore


class FakeRedis:
    """Just the three commands RedisStore issues; values come back as bytes."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value.encode("utf-8")

    def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture(params=["memory", "json", "redis"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryStore()
    if request.param == "json":
        return JsonFileStore(tmp_path / "store.json")
    return RedisStore(FakeRedis())


class TestStoragePort:
    def test_missing_key(self, any_store):
        assert any_store.get("nope") is None
        assert any_store.get("nope", []) == []

    def test_set_get_remove(self, any_store):
        any_store.set("users", [{"id": "u1", "email": "a@b.c"}])
        assert any_store.get("users") == [{"id": "u1", "email": "a@b.c"}]

        any_store.remove("users")
        assert any_store.get("users") is None

    def test_remove_missing_key_is_fine(self, any_store):
        any_store.remove("never-set")

    def test_list_by_owner(self, any_store):
        any_store.set(
            "savedRoadmaps",
            [
                {"id": "1", "userId": "alice"},
                {"id": "2", "userId": "bob"},
                {"id": "3", "userId": "alice"},
            ],
        )

        assert [r["id"] for r in any_store.list_by_owner("savedRoadmaps", "alice")] == ["1", "3"]
        assert any_store.list_by_owner("savedRoadmaps", "carol") == []
        assert any_store.list_by_owner("empty", "alice") == []


class TestJsonFileStore:
    def test_survives_reopen(self, tmp_path, sample_payload):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("roadmap", sample_payload)

        assert JsonFileStore(path).get("roadmap") == sample_payload

    def test_file_is_plain_json(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStore(path).set("k", {"a": 1})

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": '{"a": 1}'}
        assert not (tmp_path / "store.json.tmp").exists()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("", encoding="utf-8")

        assert JsonFileStore(path).get("k") is None


class TestRedisStore:
    def test_keys_are_prefixed(self):
        client = FakeRedis()
        RedisStore(client).set("users", [])

        assert list(client.data) == ["pathfinder:users"]


class TestBuildStore:
    def test_json_file_by_default(self, tmp_path):
        settings = Settings(
            _env_file=None,
            gemini_api_key="k",
            redis_url=None,
            storage_path=str(tmp_path / "s.json"),
        )
        store = build_store(settings)

        assert isinstance(store, JsonFileStore)
        assert store.path == tmp_path / "s.json"

    def test_redis_when_url_given(self):
        settings = Settings(_env_file=None, gemini_api_key="k", redis_url="redis://localhost:6379/0")

        assert isinstance(build_store(settings), RedisStore)
