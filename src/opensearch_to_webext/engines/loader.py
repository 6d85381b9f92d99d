"""Engine and locale table loader — reads the YAML data shipped beside this module.

Both tables can be extended without code changes by pointing the settings at
an extra YAML file with the same layout; its entries win over the built-in ones.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel

ENGINES_DIR = Path(__file__).parent


class EngineConfig(BaseModel):
    """Static overrides for one engine identity."""

    pattern: str | None = None
    manifest: dict = {}
    search_provider: dict = {}
    messages: dict = {}


class LocaleTables(BaseModel):
    overrides: dict[str, str] = {}
    known: frozenset[str] = frozenset()


def load_engine_configs(extra_file: Path | None = None) -> dict[str, EngineConfig]:
    """Load the engine override table, merged with an optional user file."""
    data = _load_yaml(ENGINES_DIR / "engines.yaml")
    if extra_file is not None:
        data.update(_load_yaml(extra_file))
    return {engine: EngineConfig(**(conf or {})) for engine, conf in data.items()}


def get_engine_config(engine_id: str, configs: dict[str, EngineConfig]) -> EngineConfig:
    """Return the overrides for an engine, or empty overrides when it has none."""
    return configs.get(engine_id) or EngineConfig()


def load_locale_tables(extra_file: Path | None = None) -> LocaleTables:
    """Load the filename override table and the known-locale set."""
    data = _load_yaml(ENGINES_DIR / "locales.yaml")
    overrides = dict(data.get("overrides") or {})
    known = set(data.get("known") or [])

    if extra_file is not None:
        extra = _load_yaml(extra_file)
        overrides.update(extra.get("overrides") or {})
        known.update(extra.get("known") or [])

    return LocaleTables(overrides=overrides, known=frozenset(known))


def _load_yaml(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}
