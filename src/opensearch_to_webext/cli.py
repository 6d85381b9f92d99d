"""CLI entry point for opensearch-to-webext."""

import logging
from pathlib import Path

import click

from opensearch_to_webext.discovery import find_engine_files
from opensearch_to_webext.engines.loader import get_engine_config
from opensearch_to_webext.pipeline import EngineConverter, EngineResult
from opensearch_to_webext.settings import Settings


def _load_settings(**overrides) -> Settings:
    """Environment settings with non-empty CLI options applied on top."""
    settings = Settings()
    updates = {key: value for key, value in overrides.items() if value is not None}
    settings = settings.model_copy(update=updates)

    if settings.gecko_path is None:
        raise click.UsageError("No Gecko path: pass --gecko-path or set OPENSEARCH_WEBEXT_GECKO_PATH.")
    if not settings.searchplugins_dir().is_dir():
        raise click.UsageError(f"Search plugins directory not found: {settings.searchplugins_dir()}")
    return settings


def _echo_result(result: EngineResult) -> None:
    if result.ok:
        click.echo(f"OK   {result.engine_id} -> {result.xpi_path} ({', '.join(result.locales)})")
    else:
        click.echo(f"FAIL {result.engine_id}: {result.reason}")
    for warning in result.warnings:
        click.echo(f"     warning: {warning}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """OpenSearch to WebExtension — convert search plugin XML files into .xpi bundles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("-e", "--engine", default=None, help="Engine to convert (default: every discovered engine).")
@click.option("--gecko-path", type=click.Path(exists=True, file_okay=False, path_type=Path), default=None, help="Root of a Gecko checkout.")
@click.option("--xpi", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Where to write the .xpi file (single engine only).")
@click.option("--staging-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory bundles are assembled in.")
@click.option("--dist-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory .xpi files are written to.")
def convert(engine: str | None, gecko_path: Path | None, xpi: Path | None, staging_dir: Path | None, dist_dir: Path | None):
    """Convert one engine, or all of them, into WebExtension bundles."""
    if xpi is not None and engine is None:
        raise click.UsageError("--xpi can only be used together with --engine.")

    settings = _load_settings(gecko_path=gecko_path, staging_dir=staging_dir, dist_dir=dist_dir)
    converter = EngineConverter(settings)

    if engine:
        results = [converter.convert(engine, xpi)]
    else:
        click.echo(f"Found {len(converter.engines())} engines.")
        results = converter.convert_all()

    for result in results:
        _echo_result(result)

    converted = sum(1 for r in results if r.ok)
    click.echo(f"Done! Converted {converted} of {len(results)} engines.")


@main.command()
@click.option("--gecko-path", type=click.Path(exists=True, file_okay=False, path_type=Path), default=None, help="Root of a Gecko checkout.")
def engines(gecko_path: Path | None):
    """List the engines found in the search plugins directory."""
    settings = _load_settings(gecko_path=gecko_path)
    converter = EngineConverter(settings)

    for engine_id in converter.engines():
        config = get_engine_config(engine_id, converter.engine_configs)
        files = find_engine_files(engine_id, converter.searchplugins_dir, config.pattern)
        click.echo(f"{engine_id}\t{len(files)} files")
