import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

SEARCHPLUGINS = "browser/components/search/searchplugins"


def _plugin(short_name: str, template: str) -> str:
    return (
        '<SearchPlugin xmlns="http://www.mozilla.org/2006/browser/search/">\n'
        f"<ShortName>{short_name}</ShortName>\n"
        f"<Description>{short_name} search</Description>\n"
        f'<Url type="text/html" method="GET" template="{template}">\n'
        '  <Param name="q" value="{searchTerms}"/>\n'
        "</Url>\n"
        "</SearchPlugin>\n"
    )


@pytest.fixture
def gecko_tree(tmp_path) -> Path:
    """A minimal Gecko checkout with a handful of search plugins."""
    root = tmp_path / "gecko"
    plugins = root / SEARCHPLUGINS
    images = plugins / "images"
    images.mkdir(parents=True)

    shutil.copy(FIXTURES / "google.xml", plugins / "google.xml")
    shutil.copy(FIXTURES / "duckduckgo.xml", plugins / "duckduckgo.xml")
    shutil.copy(FIXTURES / "postengine.xml", plugins / "postengine.xml")
    (images / "postengine.ico").write_bytes(b"\x00\x00\x01\x00icon")

    (plugins / "ebay-de.xml").write_text(_plugin("eBay", "http://www.ebay.de/sch/"))
    (plugins / "ebay-fr.xml").write_text(_plugin("eBay", "http://www.ebay.fr/sch/"))
    (plugins / "ebay-en.xml").write_text(_plugin("eBay", "http://www.ebay.com/sch/"))
    (plugins / "ebayx.xml").write_text(_plugin("eBayX", "http://www.ebayx.test/"))
    shutil.copy(FIXTURES / "broken.xml", plugins / "broken.xml")

    return root


@pytest.fixture
def work_dirs(tmp_path) -> dict[str, Path]:
    return {"staging_dir": tmp_path / "tmp", "dist_dir": tmp_path / "dist"}
