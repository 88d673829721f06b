"""Site-relative URLs for entity pages and images."""

THUMB = "thumb"
MEDIUM = "medium"
FULL = "full"


def entity_url(entity_type: str, entity_id: str | int) -> str:
    return f"/{entity_type}/{entity_id}"


def image_url(entity_type: str, size: str, entity_id: str | int) -> str:
    return f"/images/{entity_type}s/{size}/{entity_id}.png"
