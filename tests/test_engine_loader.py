from opensearch_to_webext.engines.loader import (
    EngineConfig,
    get_engine_config,
    load_engine_configs,
    load_locale_tables,
)


class TestLoadEngineConfigs:
    def test_builtin_wikipedia(self):
        configs = load_engine_configs()
        wiki = configs["wikipedia"]
        assert wiki.manifest["applications"]["gecko"]["id"] == "wikipedia@mozilla.org"
        assert wiki.search_provider["keyword"] == "wp"
        assert wiki.messages["url_landing"] == {"message": "Special:Search"}

    def test_unknown_engine_gets_empty_config(self):
        config = get_engine_config("nosuchengine", load_engine_configs())
        assert config == EngineConfig()
        assert config.pattern is None

    def test_extra_file_adds_and_replaces(self, tmp_path):
        extra = tmp_path / "engines.yaml"
        extra.write_text(
            "ddg:\n"
            "  search_provider:\n"
            "    keyword: ddg\n"
            "wikipedia:\n"
            "  manifest:\n"
            "    version: '2.0'\n"
        )
        configs = load_engine_configs(extra)
        assert configs["ddg"].search_provider == {"keyword": "ddg"}
        assert configs["wikipedia"].manifest == {"version": "2.0"}

    def test_empty_entry(self, tmp_path):
        extra = tmp_path / "engines.yaml"
        extra.write_text("bare:\n")
        assert load_engine_configs(extra)["bare"] == EngineConfig()


class TestLoadLocaleTables:
    def test_builtin_tables(self):
        tables = load_locale_tables()
        assert tables.overrides["bbc-alba.xml"] == "gd_GB"
        assert "en" in tables.known
        assert "en_GB" in tables.known

    def test_extra_file_extends(self, tmp_path):
        extra = tmp_path / "locales.yaml"
        extra.write_text("overrides:\n  yandex-by.xml: be\nknown:\n  - tlh\n")
        tables = load_locale_tables(extra)
        assert tables.overrides["yandex-by.xml"] == "be"
        assert tables.overrides["bbc-alba.xml"] == "gd_GB"
        assert "tlh" in tables.known
        assert "de" in tables.known
