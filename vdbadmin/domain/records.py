"""
Entity records: one JSON file per villager or item under the data directory.
"""
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from vdbadmin.core.errors import ParseError

logger = logging.getLogger(__name__)


class EntityRecord(BaseModel):
    """Parsed entity file. Unknown fields are kept so the record can be stored whole."""

    model_config = ConfigDict(extra="allow")

    id: str | int
    name: str | None = None
    gender: str | None = None
    species: str | None = None
    birthday: str | None = None
    collab: str | None = None
    category: str | None = None
    games: dict[str, dict[str, Any]] = {}


def parse_record(path: Path) -> EntityRecord:
    """Read and validate a single entity file."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as e:
        raise ParseError(path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(path, f"unreadable: {e}") from e

    if not isinstance(raw, dict):
        raise ParseError(path, f"expected a JSON object, got {type(raw).__name__}")
    try:
        return EntityRecord.model_validate(raw)
    except ValidationError as e:
        raise ParseError(path, f"invalid record: {e}") from e


def load_records(directory: Path | str, entity_type: str) -> Iterator[EntityRecord]:
    """
    Lazily yield one record per file in `directory`, in listing order.
    The first bad file raises ParseError; there is no partial-success mode.
    """
    directory = Path(directory)
    try:
        names = os.listdir(directory)
    except OSError as e:
        raise ParseError(directory, f"cannot list {entity_type} directory: {e}") from e

    logger.debug("Loading %d %s files from %s", len(names), entity_type, directory)
    for name in names:
        path = directory / name
        if not path.is_file():
            continue
        yield parse_record(path)
