import xml.etree.ElementTree as ET

import pytest

from vdbadmin.core.errors import ParseError
from vdbadmin.infrastructure.sitemap.generator import build_sitemap, render_sitemap

NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


def test_sitemap_lists_static_and_entity_pages(settings):
    assert build_sitemap(settings) == 6

    root = ET.parse(settings.SITEMAP_PATH).getroot()
    locs = [loc.text for loc in root.findall("sm:url/sm:loc", NS)]
    assert locs[:3] == [
        "https://example.test/",
        "https://example.test/villagers",
        "https://example.test/items",
    ]
    assert sorted(locs[3:5]) == ["https://example.test/villager/audie", "https://example.test/villager/bob"]
    assert locs[5] == "https://example.test/item/chair"


def test_locations_are_escaped():
    xml = render_sitemap("https://example.test", ["/item/a&b"])
    assert "<loc>https://example.test/item/a&amp;b</loc>" in xml


def test_nothing_written_when_data_is_bad(settings, data_dir):
    (data_dir / "items" / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(ParseError):
        build_sitemap(settings)
    assert not settings.SITEMAP_PATH.exists()
