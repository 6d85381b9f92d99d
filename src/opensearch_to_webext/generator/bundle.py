"""Bundle composer — merges the locale variants of one engine into a WebExtension tree."""

import copy
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from opensearch_to_webext.engines.loader import EngineConfig, LocaleTables
from opensearch_to_webext.errors import MalformedInput, NoInputFiles, UnsupportedImageType
from opensearch_to_webext.generator.icon import materialize_icon
from opensearch_to_webext.parser.base import ResolvedUrl, SearchDescriptor, VendorParam
from opensearch_to_webext.parser.opensearch import parse_descriptor_file
from opensearch_to_webext.resolver.endpoint import resolve_primary, resolve_suggestion
from opensearch_to_webext.resolver.locale import FALLBACK_LOCALE, resolve_locale

logger = logging.getLogger(__name__)

# Base manifest.json; engine specific values live under
# chrome_settings_overrides.search_provider. Never mutated, only overlaid.
MANIFEST_TEMPLATE = {
    "name": "__MSG_extensionName__",
    "description": "__MSG_extensionDescription__",
    "manifest_version": 2,
    "version": "1.0",
    "applications": {"gecko": {}},
}

SEARCH_PROVIDER_TEMPLATE = {
    "name": "__MSG_extensionName__",
}

DEFAULT_ID_SUFFIX = "mozilla.org"

# search_provider keys whose values may differ per locale -> message key
LOCALIZED_KEYS = {
    "search_url": "searchUrl",
    "search_url_post_params": "searchUrlPostParams",
    "suggest_url": "suggestUrl",
    "suggest_url_post_params": "suggestUrlPostParams",
}

# post params only make sense with the url they were generated for
POST_PARAMS_URL = {
    "search_url_post_params": "search_url",
    "suggest_url_post_params": "suggest_url",
}


class EngineBundle(BaseModel):
    """The composed output for one engine identity."""

    model_config = ConfigDict(frozen=True)

    engine_id: str
    manifest: dict
    locales: dict[str, dict]
    default_locale: str
    icon_files: list[str] = []
    warnings: list[str] = []


class _LocaleEntry(BaseModel):
    locale: str
    source: Path
    descriptor: SearchDescriptor
    primary: ResolvedUrl
    suggestion: ResolvedUrl | None = None


def overlay(base: dict, override: dict) -> dict:
    """Deep-merge override onto base, returning a new dict. Inputs are not modified."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = overlay(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def pick_default_locale(locales: list[str]) -> str:
    """'en' when available, otherwise the first locale in processing order."""
    return FALLBACK_LOCALE if FALLBACK_LOCALE in locales else locales[0]


def compose_bundle(
    engine_id: str,
    files: list[Path],
    config: EngineConfig,
    output_dir: Path,
    resource_dir: Path,
    locale_tables: LocaleTables,
    id_suffix: str = DEFAULT_ID_SUFFIX,
) -> EngineBundle:
    """Compose the manifest and message catalogs for one engine.

    Files that fail to parse are dropped with a warning. Raises NoInputFiles
    when no file is given or none survives parsing. The icon, if any, is
    written into output_dir.
    """
    if not files:
        raise NoInputFiles(f"No descriptor files found for {engine_id}")

    warnings: list[str] = []
    entries = _collect_entries(files, locale_tables, warnings)
    if not entries:
        raise NoInputFiles(f"No valid descriptor files for {engine_id}")

    locale_order = [entry.locale for entry in entries]
    default_locale = pick_default_locale(locale_order)
    configured_locale = config.manifest.get("default_locale")
    if configured_locale in locale_order:
        default_locale = configured_locale
    elif configured_locale:
        _warn(warnings, f"Configured default_locale {configured_locale!r} has no catalog; using {default_locale!r}")

    locales = {
        entry.locale: overlay(
            {
                "extensionName": {"message": entry.descriptor.short_name},
                "extensionDescription": {"message": entry.descriptor.description},
                "url_lang": {"message": entry.locale},
            },
            config.messages,
        )
        for entry in entries
    }

    # The first parsed file stands in for the non-localized fields.
    representative = entries[0]
    provider: dict = {}
    manifest: dict = {}
    overridden = config.search_provider

    _localize_urls(provider, locales, entries, default_locale, overridden)
    # Vendor params belong to the generated search url; an overridden url drops them.
    if "search_url" not in overridden and "params" not in overridden:
        if representative.primary.vendor_params:
            provider["params"] = _vendor_params(representative.primary.vendor_params)

    icon_files: list[str] = []
    if "icons" not in config.manifest:
        try:
            outcome = materialize_icon(representative.descriptor.image, output_dir, resource_dir)
        except UnsupportedImageType as e:
            _warn(warnings, f"{representative.source.name}: {e}; bundle has no icon")
        else:
            if outcome.warning:
                warnings.append(outcome.warning)
            if outcome.favicon_url and "favicon_url" not in overridden:
                provider["favicon_url"] = outcome.favicon_url
            if outcome.path:
                manifest["icons"] = {str(outcome.width): outcome.path}
                icon_files.append(outcome.path)

    manifest["applications"] = {"gecko": {"id": f"{engine_id}@{id_suffix}"}}
    manifest["default_locale"] = default_locale
    manifest["chrome_settings_overrides"] = {
        "search_provider": overlay(overlay(SEARCH_PROVIDER_TEMPLATE, provider), overridden),
    }

    final = overlay(overlay(MANIFEST_TEMPLATE, manifest), config.manifest)
    final["default_locale"] = default_locale

    return EngineBundle(
        engine_id=engine_id,
        manifest=final,
        locales=locales,
        default_locale=default_locale,
        icon_files=icon_files,
        warnings=warnings,
    )


def _collect_entries(files: list[Path], tables: LocaleTables, warnings: list[str]) -> list[_LocaleEntry]:
    entries: list[_LocaleEntry] = []
    seen: set[str] = set()

    for path in sorted(files):
        try:
            descriptor = parse_descriptor_file(path)
            primary = resolve_primary(descriptor)
            suggestion = resolve_suggestion(descriptor)
        except MalformedInput as e:
            _warn(warnings, f"Skipping {path.name}: {e}")
            continue

        locale = resolve_locale(path.name, tables.overrides, tables.known)
        if locale in seen:
            _warn(warnings, f"Skipping {path.name}: locale {locale!r} already provided")
            continue
        seen.add(locale)

        entries.append(
            _LocaleEntry(
                locale=locale,
                source=path,
                descriptor=descriptor,
                primary=primary,
                suggestion=suggestion,
            )
        )

    return entries


def _url_values(entry: _LocaleEntry) -> dict[str, str]:
    values = {
        "search_url": entry.primary.url,
        "search_url_post_params": entry.primary.post_params,
    }
    if entry.suggestion is not None:
        values["suggest_url"] = entry.suggestion.url
        values["suggest_url_post_params"] = entry.suggestion.post_params
    return {key: value for key, value in values.items() if value}


def _localize_urls(
    provider: dict,
    locales: dict[str, dict],
    entries: list[_LocaleEntry],
    default_locale: str,
    overridden: dict,
) -> None:
    """Fill url fields: literals for one locale, __MSG_ references for several."""
    per_locale = {entry.locale: _url_values(entry) for entry in entries}

    for key, message_key in LOCALIZED_KEYS.items():
        if key in overridden or POST_PARAMS_URL.get(key) in overridden:
            continue
        present = [values[key] for values in per_locale.values() if key in values]
        if not present:
            continue

        if len(entries) == 1:
            provider[key] = present[0]
            continue

        provider[key] = f"__MSG_{message_key}__"
        fallback = per_locale.get(default_locale, {}).get(key, present[0])
        for locale, values in per_locale.items():
            locales[locale][message_key] = {"message": values.get(key, fallback)}


def _vendor_params(params: list[VendorParam]) -> list[dict]:
    return [p.model_dump(exclude_none=True) for p in params]


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)
