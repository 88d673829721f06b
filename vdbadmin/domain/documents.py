"""
Entity record -> search document.

Per-game sub-objects are flattened into top-level keyword fields so that
queries and facets never need nested lookups.
"""
from typing import Any

from vdbadmin.core.config import ITEM, VILLAGER
from vdbadmin.core.errors import RecordError
from vdbadmin.domain.records import EntityRecord
from vdbadmin.domain.urls import THUMB, entity_url, image_url
from vdbadmin.domain.zodiac import zodiac_for_birthday

DEFAULT_COLLAB = "Standard"

# Item document field -> per-game source key. The value from the last game
# iterated wins: nothing is merged across games.
# TODO: confirm whether these should aggregate across games (orderable in
# any game, union of themes) before changing item search facets.
ITEM_GAME_FIELDS = {
    "orderable": "orderable",
    "interiorTheme": "interiorThemes",
    "fashionTheme": "fashionThemes",
    "set": "set",
}


def document_id(entity_type: str, entity_id: str | int) -> str:
    """Stable id: re-indexing the same entity overwrites its document."""
    return f"{entity_type}-{entity_id}"


def _villager_fields(record: EntityRecord) -> dict[str, Any]:
    personality: list[Any] = []
    for game in record.games.values():
        value = game.get("personality")
        if value is not None and value not in personality:
            personality.append(value)

    fields: dict[str, Any] = {
        "gender": record.gender,
        "species": record.species,
        "personality": personality,
        "collab": record.collab or DEFAULT_COLLAB,
    }
    if record.birthday:
        fields["zodiac"] = zodiac_for_birthday(record.birthday).lower()
    return fields


def _item_fields(record: EntityRecord) -> dict[str, Any]:
    fields: dict[str, Any] = {"category": record.category}
    for game in record.games.values():
        for field, key in ITEM_GAME_FIELDS.items():
            fields[field] = game.get(key)
    return fields


def normalize_fields(record: EntityRecord, entity_type: str) -> dict[str, Any]:
    """
    Derive the flat search fields for one record.
    Fields that end up None are left out of the result.
    """
    if not record.name:
        raise RecordError(f"{entity_type} {record.id!r} has no name")

    fields: dict[str, Any] = {
        "keyword": record.name.lower(),
        "game": list(record.games.keys()),
    }
    if entity_type == VILLAGER:
        fields.update(_villager_fields(record))
    elif entity_type == ITEM:
        fields.update(_item_fields(record))
    else:
        raise RecordError(f"unknown entity type {entity_type!r}")
    return {k: v for k, v in fields.items() if v is not None}


def build_document(record: EntityRecord, entity_type: str) -> tuple[str, dict[str, Any]]:
    """Return (document id, document body) for one record."""
    fields = normalize_fields(record, entity_type)
    body: dict[str, Any] = {
        "type": entity_type,
        "suggest": {"input": [record.name]},
        "name": record.name,
        **fields,
        "url": entity_url(entity_type, record.id),
        "imageUrl": image_url(entity_type, THUMB, record.id),
    }
    return document_id(entity_type, record.id), body
