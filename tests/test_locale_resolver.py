from opensearch_to_webext.engines.loader import load_locale_tables
from opensearch_to_webext.resolver.locale import resolve_locale

KNOWN = {"en", "de", "fr", "pt_BR", "sv_SE"}


class TestResolveLocale:
    def test_no_hyphen_falls_back_to_en(self):
        assert resolve_locale("google.xml", {}, KNOWN) == "en"

    def test_known_suffix(self):
        assert resolve_locale("google-de.xml", {}, KNOWN) == "de"

    def test_hyphen_in_locale_normalized(self):
        assert resolve_locale("google-pt-BR.xml", {}, KNOWN) == "pt_BR"

    def test_unknown_suffix_falls_back(self):
        assert resolve_locale("foo-en_GB.xml", {}, KNOWN) == "en"

    def test_override_wins(self):
        assert resolve_locale("bbc-alba.xml", {"bbc-alba.xml": "gd_GB"}, KNOWN) == "gd_GB"

    def test_override_matched_by_basename(self):
        overrides = {"bbc-alba.xml": "gd_GB"}
        assert resolve_locale("/gecko/searchplugins/bbc-alba.xml", overrides, KNOWN) == "gd_GB"

    def test_uses_first_hyphen(self):
        assert resolve_locale("allaannonser-sv-SE.xml", {}, KNOWN) == "sv_SE"

    def test_deterministic(self):
        results = {resolve_locale("google-fr.xml", {}, KNOWN) for _ in range(5)}
        assert results == {"fr"}


class TestBuiltinLocaleTables:
    def test_builtin_override_for_bbc_alba(self):
        tables = load_locale_tables()
        assert resolve_locale("bbc-alba.xml", tables.overrides, tables.known) == "gd_GB"

    def test_builtin_known_locales(self):
        tables = load_locale_tables()
        assert resolve_locale("google-zh-CN.xml", tables.overrides, tables.known) == "zh_CN"
