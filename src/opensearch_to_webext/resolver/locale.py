"""Locale resolution from descriptor file names."""

from collections.abc import Collection, Mapping
from pathlib import PurePath

FALLBACK_LOCALE = "en"


def resolve_locale(
    filename: str,
    overrides: Mapping[str, str],
    known_locales: Collection[str],
) -> str:
    """Derive a locale tag from a descriptor file name.

    The override table is checked first, by basename. Otherwise the text
    between the first hyphen and the extension is used, with hyphens
    normalized to underscores ('google-pt-BR.xml' -> 'pt_BR'). Names without
    a hyphen, or whose candidate is not a known locale, fall back to 'en'.
    """
    name = PurePath(filename).name
    if name in overrides:
        return overrides[name]

    stem = PurePath(name).stem
    _, hyphen, candidate = stem.partition("-")
    if not hyphen:
        return FALLBACK_LOCALE

    candidate = candidate.replace("-", "_")
    if candidate not in known_locales:
        return FALLBACK_LOCALE
    return candidate
