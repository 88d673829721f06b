"""
12-Factor config: everything comes from the environment (or .env).
SecretStr ensures credentials are never logged in plain text.
"""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

VILLAGER = "villager"
ITEM = "item"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App (non-sensitive, safe defaults)
    DEBUG: bool = Field(default=False, description="Debug mode")

    # Entity JSON store
    DATA_DIR: Path = Field(default=Path("data"), description="Root of the entity JSON files")
    VILLAGERS_DIR: str = Field(default="villagers", description="Villager subdirectory of DATA_DIR")
    ITEMS_DIR: str = Field(default="items", description="Item subdirectory of DATA_DIR")

    # Elasticsearch
    ELASTICSEARCH_URL: str = Field(
        default="http://localhost:9200",
        description="Elasticsearch URL (e.g. http://localhost:9200)",
    )
    ELASTICSEARCH_USER: str | None = Field(default=None, description="Elasticsearch basic auth user")
    ELASTICSEARCH_PASSWORD: SecretStr | None = Field(
        default=None,
        description="Elasticsearch basic auth password",
    )
    ELASTICSEARCH_INDEX_NAME: str = Field(default="villagerdb", description="Search index name")
    ELASTICSEARCH_TIMEOUT: int = Field(default=30, description="Request timeout in seconds")

    # Redis
    REDIS_URL: SecretStr = Field(
        default=SecretStr("redis://localhost:6379/0"),
        description="Redis URL; may embed a password",
    )

    # Sitemap
    SITE_URL: str = Field(default="https://villagerdb.com", description="Absolute site base URL")
    SITEMAP_PATH: Path = Field(default=Path("public/sitemap.xml"), description="Sitemap output file")

    def entity_dir(self, entity_type: str) -> Path:
        """Directory holding the JSON files for one entity type."""
        subdirs = {VILLAGER: self.VILLAGERS_DIR, ITEM: self.ITEMS_DIR}
        return Path(self.DATA_DIR) / subdirs[entity_type]

    def sources(self) -> list[tuple[str, Path]]:
        """(entity type, directory) pairs in processing order: villagers, then items."""
        return [(VILLAGER, self.entity_dir(VILLAGER)), (ITEM, self.entity_dir(ITEM))]


@lru_cache()
def get_settings() -> Settings:
    """Cached settings; the only place the environment is read."""
    return Settings()
