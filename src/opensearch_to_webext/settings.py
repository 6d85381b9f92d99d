"""Configuration for the converter, from environment variables or a .env file."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OPENSEARCH_WEBEXT_", env_file=".env", extra="ignore")

    gecko_path: Path | None = Field(default=None, description="Root of a Gecko source checkout")
    searchplugins_folder: str = Field(
        default="browser/components/search/searchplugins/",
        description="Descriptor directory, relative to gecko_path",
    )
    icon_resources: str = Field(
        default="browser/components/search/searchplugins/images/",
        description="Icon resource directory, relative to gecko_path",
    )
    staging_dir: Path = Field(default=Path("tmp"), description="Where bundles are assembled before zipping")
    dist_dir: Path = Field(default=Path("dist"), description="Where .xpi files are written")
    id_suffix: str = Field(default="mozilla.org", description="Suffix of generated extension ids")

    # Extra YAML tables merged over the built-in ones
    engines_file: Path | None = None
    locales_file: Path | None = None

    def searchplugins_dir(self) -> Path:
        return self._require_gecko_path() / self.searchplugins_folder

    def icon_resources_dir(self) -> Path:
        return self._require_gecko_path() / self.icon_resources

    def _require_gecko_path(self) -> Path:
        if self.gecko_path is None:
            raise ValueError("gecko_path is not configured")
        return self.gecko_path
