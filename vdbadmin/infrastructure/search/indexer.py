"""
Search indexer: rebuilds the Elasticsearch index from the entity JSON files.
Name search uses an ASCII-folding analyzer plus an edge n-gram analyzer for typeahead.
"""
import logging
from pathlib import Path
from typing import Any

from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError

from vdbadmin.core.config import Settings
from vdbadmin.core.errors import IndexStoreError
from vdbadmin.domain.documents import build_document
from vdbadmin.domain.records import load_records

logger = logging.getLogger(__name__)

FULL_TOKEN_ANALYZER = "vdb_ascii_fold"
PARTIAL_MATCH_ANALYZER = "vdb_ascii_fold_partial_match"

INDEX_SETTINGS: dict[str, Any] = {
    "analysis": {
        "filter": {
            "vdb_ascii_fold_filter": {
                "type": "asciifolding",
                "preserve_original": True,
            }
        },
        "tokenizer": {
            "vdb_edge_ngram_tokenizer": {
                "type": "edge_ngram",
                "min_gram": 2,
                "max_gram": 10,
                "token_chars": ["letter", "digit"],
            }
        },
        "analyzer": {
            FULL_TOKEN_ANALYZER: {
                "type": "custom",
                "tokenizer": "standard",
                "filter": ["lowercase", "vdb_ascii_fold_filter"],
            },
            PARTIAL_MATCH_ANALYZER: {
                "type": "custom",
                "tokenizer": "vdb_edge_ngram_tokenizer",
                "filter": ["lowercase", "vdb_ascii_fold_filter"],
            },
        },
    }
}

KEYWORD_FIELDS = [
    "type",
    "keyword",
    "gender",
    "species",
    "personality",
    "game",
    "zodiac",
    "category",
    "interiorTheme",
    "fashionTheme",
    "set",
    "collab",
]

INDEX_MAPPING: dict[str, Any] = {
    "suggest": {"type": "completion", "analyzer": FULL_TOKEN_ANALYZER},
    **{field: {"type": "keyword"} for field in KEYWORD_FIELDS},
    "orderable": {"type": "boolean"},
    "name": {"type": "text", "analyzer": PARTIAL_MATCH_ANALYZER},
}


def get_elasticsearch_client(settings: Settings) -> Elasticsearch:
    """Create Elasticsearch client from settings."""
    options: dict[str, Any] = {"request_timeout": settings.ELASTICSEARCH_TIMEOUT}
    if settings.ELASTICSEARCH_USER and settings.ELASTICSEARCH_PASSWORD:
        options["basic_auth"] = (
            settings.ELASTICSEARCH_USER,
            settings.ELASTICSEARCH_PASSWORD.get_secret_value(),
        )
    return Elasticsearch(settings.ELASTICSEARCH_URL, **options)


def ensure_index_absent(client: Elasticsearch, index_name: str) -> None:
    """Delete the index. An index that does not exist already counts as deleted."""
    try:
        client.indices.delete(index=index_name)
    except NotFoundError:
        logger.debug("Index %s did not exist", index_name)
    except (ApiError, TransportError) as e:
        raise IndexStoreError(f"Failed to delete index {index_name}: {e}") from e


def create_index(client: Elasticsearch, index_name: str) -> None:
    """Create the index with the name analyzers."""
    try:
        client.indices.create(index=index_name, settings=INDEX_SETTINGS)
    except (ApiError, TransportError) as e:
        raise IndexStoreError(f"Failed to create index {index_name}: {e}") from e


def put_mapping(client: Elasticsearch, index_name: str) -> None:
    try:
        client.indices.put_mapping(index=index_name, properties=INDEX_MAPPING)
    except (ApiError, TransportError) as e:
        raise IndexStoreError(f"Failed to put mapping on {index_name}: {e}") from e


def upsert_document(client: Elasticsearch, index_name: str, doc_id: str, body: dict[str, Any]) -> None:
    try:
        client.index(index=index_name, id=doc_id, document=body)
    except (ApiError, TransportError) as e:
        raise IndexStoreError(f"Failed to index {doc_id}: {e}") from e


def _index_entities(
    client: Elasticsearch,
    index_name: str,
    entity_type: str,
    directory: Path,
) -> int:
    """Index every record of one entity type, one synchronous request per document."""
    count = 0
    for record in load_records(directory, entity_type):
        doc_id, body = build_document(record, entity_type)
        upsert_document(client, index_name, doc_id, body)
        count += 1
        logger.info("Indexed %s", doc_id)
    logger.info("Indexed %d %s documents", count, entity_type)
    return count


def build_search_index(client: Elasticsearch, settings: Settings) -> dict[str, int]:
    """
    Full rebuild: drop, create, map, then index villagers followed by items.
    Any failure propagates; documents already sent stay in the index.
    Returns per-entity-type counts plus the total.
    """
    index_name = settings.ELASTICSEARCH_INDEX_NAME
    ensure_index_absent(client, index_name)
    create_index(client, index_name)
    put_mapping(client, index_name)
    logger.info("Created %s index", index_name)

    result: dict[str, int] = {}
    for entity_type, directory in settings.sources():
        result[entity_type] = _index_entities(client, index_name, entity_type, directory)
    result["total"] = sum(result.values())
    logger.info("Reindex complete: %s", result)
    return result
