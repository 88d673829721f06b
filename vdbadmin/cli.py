"""
Admin commands: sitemap, search index and Redis database maintenance.

Usage:
  vdb-admin <command>
"""
import logging
import sys
from collections.abc import Callable, Sequence

from vdbadmin.core.config import Settings, get_settings
from vdbadmin.core.errors import UsageError
from vdbadmin.infrastructure.redis_db.populate import build_redis_db, get_redis_client
from vdbadmin.infrastructure.search.indexer import (
    build_search_index,
    ensure_index_absent,
    get_elasticsearch_client,
)
from vdbadmin.infrastructure.sitemap.generator import build_sitemap

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: vdb-admin <command>\n"
    "Commands:\n"
    "  generate-sitemap       write the sitemap file\n"
    "  delete-search-index    delete the search index\n"
    "  build-search-index     recreate and fill the search index\n"
    "  build-redis-db         rebuild the Redis database"
)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def generate_sitemap(settings: Settings) -> str:
    count = build_sitemap(settings)
    return f"Sitemap generated with {count} URLs."


def delete_search_index(settings: Settings) -> str:
    index_name = settings.ELASTICSEARCH_INDEX_NAME
    ensure_index_absent(get_elasticsearch_client(settings), index_name)
    return f"Deleted {index_name} index."


def rebuild_search_index(settings: Settings) -> str:
    result = build_search_index(get_elasticsearch_client(settings), settings)
    return (
        f"Search index {settings.ELASTICSEARCH_INDEX_NAME} built | "
        f"Villagers: {result['villager']} | Items: {result['item']} | Total: {result['total']}"
    )


def rebuild_redis_db(settings: Settings) -> str:
    result = build_redis_db(get_redis_client(settings), settings)
    return (
        f"Redis database built | "
        f"Villagers: {result['villager']} | Items: {result['item']} | Total: {result['total']}"
    )


COMMANDS: dict[str, Callable[[Settings], str]] = {
    "generate-sitemap": generate_sitemap,
    "delete-search-index": delete_search_index,
    "build-search-index": rebuild_search_index,
    "build-redis-db": rebuild_redis_db,
}


def parse_command(argv: Sequence[str]) -> str:
    """Exactly one argument, naming a known command."""
    if len(argv) != 1:
        raise UsageError(f"expected exactly one command, got {len(argv)} arguments")
    if argv[0] not in COMMANDS:
        raise UsageError(f"unknown command {argv[0]!r}")
    return argv[0]


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    try:
        command = parse_command(argv)
    except UsageError as e:
        print(f"{e}\n{USAGE}", file=sys.stderr)
        return 1

    if settings is None:
        settings = get_settings()
    configure_logging(settings)
    try:
        message = COMMANDS[command](settings)
    except Exception as e:
        logger.exception("%s failed", command)
        print(f"ERROR: {command} failed: {e}", file=sys.stderr)
        return 1
    logger.info(message)
    print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
