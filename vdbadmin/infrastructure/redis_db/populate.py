"""
Redis database: one JSON string per entity plus an alphabetical sorted set per entity type.

Keys:
  {type}_{id}  -> record JSON
  {type}s      -> sorted set of ids, scored by case-insensitive name order
"""
import json
import logging
from pathlib import Path

import redis

from vdbadmin.core.config import Settings
from vdbadmin.core.errors import KeyValueStoreError
from vdbadmin.domain.records import EntityRecord, load_records

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 1000


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create Redis client from settings."""
    return redis.Redis.from_url(settings.REDIS_URL.get_secret_value(), decode_responses=True)


def entity_key(entity_type: str, entity_id: str | int) -> str:
    return f"{entity_type}_{entity_id}"


def entity_set_key(entity_type: str) -> str:
    return f"{entity_type}s"


def _sort_key(record: EntityRecord) -> tuple[str, str]:
    return ((record.name or "").lower(), str(record.id))


def _clear_entities(client: redis.Redis, entity_type: str) -> int:
    """Remove the previous generation of keys for one entity type."""
    stale = list(client.scan_iter(match=f"{entity_type}_*", count=SCAN_BATCH_SIZE))
    stale.append(entity_set_key(entity_type))
    return client.delete(*stale)


def populate_entities(client: redis.Redis, entity_type: str, directory: Path) -> int:
    """Replace all Redis data for one entity type with the records in `directory`."""
    # Load everything first: a bad file must not leave Redis half cleared.
    records = sorted(load_records(directory, entity_type), key=_sort_key)
    try:
        removed = _clear_entities(client, entity_type)
        logger.debug("Removed %d stale %s keys", removed, entity_type)

        pipe = client.pipeline(transaction=False)
        for position, record in enumerate(records):
            payload = record.model_dump(mode="json", exclude_unset=True)
            pipe.set(entity_key(entity_type, record.id), json.dumps(payload))
            pipe.zadd(entity_set_key(entity_type), {str(record.id): position})
        pipe.execute()
    except redis.RedisError as e:
        raise KeyValueStoreError(f"Failed to populate {entity_type} data: {e}") from e

    logger.info("Stored %d %s records in Redis", len(records), entity_type)
    return len(records)


def build_redis_db(client: redis.Redis, settings: Settings) -> dict[str, int]:
    """Populate villagers, then items. Returns per-entity-type counts plus the total."""
    result: dict[str, int] = {}
    for entity_type, directory in settings.sources():
        result[entity_type] = populate_entities(client, entity_type, directory)
    result["total"] = sum(result.values())
    return result
