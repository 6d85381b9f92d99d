"""Icon materializer — turns a descriptor image reference into a bundle icon."""

import logging
import shutil
from pathlib import Path, PurePosixPath

from pydantic import BaseModel

from opensearch_to_webext.errors import UnsupportedImageType
from opensearch_to_webext.parser.base import (
    ImageRef,
    InlineImage,
    RemoteImage,
    ResourceImage,
)

logger = logging.getLogger(__name__)

ICON_BASENAME = "favicon"

CONTENT_TYPE_EXTENSIONS = {
    "image/png": "png",
    "image/gif": "gif",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/ico": "ico",
    "image/icon": "ico",
    "image/x-ico": "ico",
    "application/ico": "ico",
    "text/ico": "ico",
}


class IconOutcome(BaseModel):
    """Result of materializing an icon. At most one of favicon_url, path and warning is set."""

    favicon_url: str | None = None
    path: str | None = None  # relative to the bundle root
    width: int = 16
    warning: str | None = None


def extension_for(content_type: str) -> str:
    """Map a declared image content type to a file extension."""
    ext = CONTENT_TYPE_EXTENSIONS.get(content_type.strip().lower())
    if ext is None:
        raise UnsupportedImageType(content_type)
    return ext


def materialize_icon(image: ImageRef | None, output_dir: Path, resource_dir: Path) -> IconOutcome:
    """Represent an image reference in the bundle.

    Remote images pass through as a favicon url. Inline and resource images
    are written to output_dir as favicon.<ext>. Raises UnsupportedImageType
    for inline images with an unknown content type; every other problem is
    reported through IconOutcome.warning.
    """
    if image is None:
        return IconOutcome()

    if isinstance(image, RemoteImage):
        return IconOutcome(favicon_url=image.url, width=image.width)

    if isinstance(image, InlineImage):
        filename = f"{ICON_BASENAME}.{extension_for(image.content_type)}"
        (output_dir / filename).write_bytes(image.data)
        return IconOutcome(path=filename, width=image.width)

    if isinstance(image, ResourceImage):
        return _copy_resource(image, output_dir, resource_dir)

    warning = f"Unsupported image reference: {image.raw[:80]!r}"
    logger.warning(warning)
    return IconOutcome(warning=warning)


def _copy_resource(image: ResourceImage, output_dir: Path, resource_dir: Path) -> IconOutcome:
    name = PurePosixPath(image.path).name
    source = resource_dir / name
    if not source.is_file():
        warning = f"Icon resource not found: {source}"
        logger.warning(warning)
        return IconOutcome(warning=warning)

    filename = ICON_BASENAME + PurePosixPath(name).suffix.lower()
    shutil.copyfile(source, output_dir / filename)
    return IconOutcome(path=filename, width=image.width)
