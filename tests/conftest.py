"""
Shared pytest fixtures: a temporary entity data directory, explicit settings,
and in-memory stand-ins for the Elasticsearch and Redis clients.
"""
import fnmatch
import json
from pathlib import Path

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import NotFoundError

from vdbadmin.core.config import Settings

VILLAGERS = {
    "bob": {
        "id": "bob",
        "name": "Bob",
        "gender": "male",
        "species": "cat",
        "birthday": "01-01",
        "games": {
            "AC:NH": {"personality": "lazy"},
            "AC:PC": {"personality": "lazy"},
        },
    },
    "audie": {
        "id": "audie",
        "name": "Audie",
        "gender": "female",
        "species": "wolf",
        "birthday": "08-31",
        "collab": "Sanrio",
        "games": {"AC:NH": {"personality": "peppy"}},
    },
}

ITEMS = {
    "chair": {
        "id": "chair",
        "name": "Chair",
        "category": "Furniture",
        "games": {
            "g1": {"orderable": True, "set": "A", "interiorThemes": ["cute"]},
            "g2": {"orderable": False, "set": "B"},
        },
    },
}


def write_records(directory: Path, records: dict) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name, record in records.items():
        (directory / f"{name}.json").write_text(json.dumps(record), encoding="utf-8")


def make_api_error(cls, status: int, message: str = "error"):
    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return cls(message=message, meta=meta, body={"error": message})


@pytest.fixture
def data_dir(tmp_path):
    root = tmp_path / "data"
    write_records(root / "villagers", VILLAGERS)
    write_records(root / "items", ITEMS)
    return root


@pytest.fixture
def settings(data_dir, tmp_path):
    return Settings(
        _env_file=None,
        DATA_DIR=data_dir,
        ELASTICSEARCH_INDEX_NAME="villagerdb-test",
        SITE_URL="https://example.test/",
        SITEMAP_PATH=tmp_path / "public" / "sitemap.xml",
    )


class FakeIndices:
    def __init__(self, es: "FakeElasticsearch") -> None:
        self._es = es

    def delete(self, index):
        self._es.calls.append(("delete", index))
        if self._es.delete_error is not None:
            raise self._es.delete_error
        if index not in self._es.created:
            raise make_api_error(NotFoundError, 404, "index_not_found_exception")
        del self._es.created[index]

    def create(self, index, settings):
        self._es.calls.append(("create", index))
        self._es.created[index] = {"settings": settings, "mappings": None}

    def put_mapping(self, index, properties):
        self._es.calls.append(("put_mapping", index))
        self._es.created[index]["mappings"] = properties


class FakeElasticsearch:
    """Records calls in order and keeps documents keyed by (index, id)."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.created: dict[str, dict] = {}
        self.documents: dict[tuple[str, str], dict] = {}
        self.delete_error = None
        self.index_error = None
        self.indices = FakeIndices(self)

    def index(self, index, id, document):
        self.calls.append(("index", id))
        if self.index_error is not None:
            raise self.index_error
        self.documents[(index, id)] = document


@pytest.fixture
def es_client():
    return FakeElasticsearch()


class FakePipeline:
    def __init__(self, redis: "FakeRedis") -> None:
        self._redis = redis
        self._ops: list = []

    def set(self, key, value):
        self._ops.append(("set", key, value))

    def zadd(self, key, mapping):
        self._ops.append(("zadd", key, mapping))

    def execute(self):
        for op, key, value in self._ops:
            getattr(self._redis, op)(key, value)
        self._ops = []


class FakeRedis:
    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.zsets: dict[str, dict[str, float]] = {}

    def scan_iter(self, match="*", count=None):
        return [k for k in list(self.strings) + list(self.zsets) if fnmatch.fnmatchcase(k, match)]

    def delete(self, *keys):
        removed = 0
        for key in keys:
            removed += int(self.strings.pop(key, None) is not None)
            removed += int(self.zsets.pop(key, None) is not None)
        return removed

    def set(self, key, value):
        self.strings[key] = value

    def zadd(self, key, mapping):
        self.zsets.setdefault(key, {}).update(mapping)

    def zrange(self, key, start, end):
        members = sorted(self.zsets.get(key, {}).items(), key=lambda kv: kv[1])
        end = len(members) if end == -1 else end + 1
        return [member for member, _ in members[start:end]]

    def pipeline(self, transaction=True):
        return FakePipeline(self)


@pytest.fixture
def redis_client():
    return FakeRedis()
