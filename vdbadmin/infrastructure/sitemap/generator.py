"""Build sitemap.xml listing the static pages and every entity page."""
import logging
from pathlib import Path
from xml.sax.saxutils import escape as xml_escape

from vdbadmin.core.config import Settings
from vdbadmin.domain.records import load_records
from vdbadmin.domain.urls import entity_url

logger = logging.getLogger(__name__)

STATIC_PAGES = ["/", "/villagers", "/items"]


def collect_paths(settings: Settings) -> list[str]:
    paths = list(STATIC_PAGES)
    for entity_type, directory in settings.sources():
        paths.extend(entity_url(entity_type, record.id) for record in load_records(directory, entity_type))
    return paths


def render_sitemap(site_url: str, paths: list[str]) -> str:
    base = site_url.rstrip("/")
    urls = [f"  <url>\n    <loc>{xml_escape(base + path)}</loc>\n  </url>" for path in paths]
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(urls)
        + "\n</urlset>\n"
    )


def build_sitemap(settings: Settings) -> int:
    """Write the sitemap; returns the number of URLs. Nothing is written if a record fails to load."""
    paths = collect_paths(settings)
    out = Path(settings.SITEMAP_PATH)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_sitemap(settings.SITE_URL, paths), encoding="utf-8")
    logger.info("Generated sitemap with %d URLs -> %s", len(paths), out)
    return len(paths)
