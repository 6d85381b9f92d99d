"""Discovery of descriptor files and engine identities under a searchplugins dir."""

from pathlib import Path


def engine_id_for(path: Path) -> str:
    """Engine identity of a descriptor file: 'google-pt-BR.xml' -> 'google'."""
    return path.name.split("-")[0].replace(".xml", "")


def discover_engines(searchplugins_dir: Path) -> list[str]:
    """List every engine identity with at least one descriptor, sorted."""
    return sorted({engine_id_for(p) for p in searchplugins_dir.glob("*.xml")})


def find_engine_files(engine_id: str, searchplugins_dir: Path, pattern: str | None = None) -> list[Path]:
    """Find the descriptor files of one engine.

    The default glob '<engine>*.xml' also matches longer engine names
    ('amazon' vs 'amazondotcom'), so results are narrowed to files whose
    identity is exactly engine_id. A configured pattern is used as is.
    """
    if pattern:
        return sorted(searchplugins_dir.glob(pattern))
    return sorted(
        p for p in searchplugins_dir.glob(f"{engine_id}*.xml")
        if engine_id_for(p) == engine_id
    )
