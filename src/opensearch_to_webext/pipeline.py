"""Per-engine conversion driver: discover -> check -> compose -> write -> zip."""

import logging
import shutil
from pathlib import Path

from pydantic import BaseModel

from opensearch_to_webext.discovery import discover_engines, find_engine_files
from opensearch_to_webext.engines.loader import get_engine_config, load_engine_configs, load_locale_tables
from opensearch_to_webext.errors import ConversionError, NoInputFiles, OutputAlreadyExists
from opensearch_to_webext.generator.bundle import compose_bundle
from opensearch_to_webext.generator.package import write_bundle, zip_directory
from opensearch_to_webext.settings import Settings

logger = logging.getLogger(__name__)


class EngineResult(BaseModel):
    """Outcome of converting one engine."""

    engine_id: str
    ok: bool
    xpi_path: Path | None = None
    locales: list[str] = []
    reason: str | None = None
    warnings: list[str] = []


class EngineConverter:
    """Converts engines one at a time; a failing engine never stops the batch."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine_configs = load_engine_configs(settings.engines_file)
        self.locale_tables = load_locale_tables(settings.locales_file)
        self.searchplugins_dir = settings.searchplugins_dir()
        self.icon_dir = settings.icon_resources_dir()

    def engines(self) -> list[str]:
        return discover_engines(self.searchplugins_dir)

    def convert_all(self) -> list[EngineResult]:
        return [self.convert(engine_id) for engine_id in self.engines()]

    def convert(self, engine_id: str, xpi_path: Path | None = None) -> EngineResult:
        """Convert one engine, reporting failures in the result instead of raising."""
        try:
            return self._convert(engine_id, xpi_path)
        except ConversionError as e:
            logger.warning("Engine %s failed: %s", engine_id, e)
            return EngineResult(engine_id=engine_id, ok=False, reason=str(e))

    def _convert(self, engine_id: str, xpi_path: Path | None) -> EngineResult:
        config = get_engine_config(engine_id, self.engine_configs)
        files = find_engine_files(engine_id, self.searchplugins_dir, config.pattern)
        if not files:
            raise NoInputFiles(f"No files to convert found for {engine_id}")

        # Checked before anything is written so an old bundle is never half overwritten.
        staging = self.settings.staging_dir / engine_id
        if staging.exists():
            raise OutputAlreadyExists(f"Destination {staging} already exists")

        logger.info("Processing %s: found %d files", engine_id, len(files))
        staging.mkdir(parents=True)
        xpi = xpi_path or self.settings.dist_dir / f"{engine_id}.xpi"
        try:
            bundle = compose_bundle(
                engine_id,
                files,
                config,
                output_dir=staging,
                resource_dir=self.icon_dir,
                locale_tables=self.locale_tables,
                id_suffix=self.settings.id_suffix,
            )
            write_bundle(bundle, staging)
            zip_directory(staging, xpi)
        except ConversionError:
            shutil.rmtree(staging, ignore_errors=True)
            raise
        except OSError as e:
            shutil.rmtree(staging, ignore_errors=True)
            raise ConversionError(f"I/O error while building {engine_id}: {e}") from e

        return EngineResult(
            engine_id=engine_id,
            ok=True,
            xpi_path=xpi,
            locales=list(bundle.locales),
            warnings=bundle.warnings,
        )
