"""OpenSearch / SearchPlugin descriptor parser.

Parses Mozilla SearchPlugin and OpenSearch 1.1 XML documents into
SearchDescriptor models.
"""

import base64
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from urllib.parse import unquote_to_bytes

from opensearch_to_webext.errors import MalformedInput
from opensearch_to_webext.parser.base import (
    EndpointDef,
    ImageRef,
    InlineImage,
    Param,
    RemoteImage,
    ResourceImage,
    SearchDescriptor,
    UnknownImage,
    VendorParam,
)
from opensearch_to_webext.parser.detect import locate_root

logger = logging.getLogger(__name__)

RESOURCE_SCHEMES = ("resource:", "chrome:")
RESOURCE_SUFFIXES = (".ico", ".png", ".gif", ".svg", ".jpg", ".jpeg")


def parse_descriptor_file(file_path: Path) -> SearchDescriptor:
    """Parse a descriptor file into a SearchDescriptor."""
    # utf-8-sig drops a leading BOM; locate_root tolerates anything else
    try:
        text = file_path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise MalformedInput(f"{file_path.name}: unreadable ({e.strerror or e})") from e
    try:
        return parse_descriptor(text)
    except MalformedInput as e:
        raise MalformedInput(f"{file_path.name}: {e}") from e


def parse_descriptor(text: str) -> SearchDescriptor:
    """Parse raw descriptor text into a SearchDescriptor."""
    dialect, markup = locate_root(text)
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as e:
        raise MalformedInput(f"Invalid XML: {e}") from e

    short_name = _child_text(root, "ShortName")
    description = _child_text(root, "Description")
    if not short_name:
        raise MalformedInput("Missing <ShortName>")
    if not description:
        raise MalformedInput("Missing <Description>")

    endpoints = [_parse_url(el) for el in _children(root, "Url")]
    if not endpoints:
        raise MalformedInput("No <Url> elements")

    image_el = next(iter(_children(root, "Image")), None)

    return SearchDescriptor(
        short_name=short_name,
        description=description,
        image=_parse_image(image_el) if image_el is not None else None,
        endpoints=endpoints,
        dialect=dialect,
        input_encoding=_child_text(root, "InputEncoding") or None,
    )


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> str:
    for child in _children(element, name):
        return (child.text or "").strip()
    return ""


def _parse_url(element: ET.Element) -> EndpointDef:
    template = element.get("template")
    if not template:
        raise MalformedInput("<Url> without a template attribute")

    method = (element.get("method") or "GET").upper()
    if method not in ("GET", "POST"):
        raise MalformedInput(f"Unsupported <Url> method: {method}")

    params = [
        Param(name=p.get("name", ""), value=p.get("value", ""))
        for p in _children(element, "Param")
    ]
    vendor_params = [
        VendorParam(name=p.get("name", ""), value=p.get("value", ""), purpose=p.get("purpose"))
        for p in _children(element, "MozParam")
    ]

    return EndpointDef(
        template=template,
        type=element.get("type", "text/html"),
        method=method,
        params=params,
        vendor_params=vendor_params,
    )


def _parse_image(element: ET.Element) -> ImageRef:
    raw = (element.text or "").strip()
    width = _parse_width(element.get("width"))

    if raw.startswith("http"):
        return RemoteImage(url=raw, width=width)
    if raw.startswith("data:"):
        try:
            content_type, data = _decode_data_uri(raw)
        except ValueError as e:
            logger.warning("Undecodable inline image: %s", e)
            return UnknownImage(raw=raw[:64], width=width)
        return InlineImage(content_type=content_type, data=data, width=width)
    if raw.startswith(RESOURCE_SCHEMES) or raw.lower().endswith(RESOURCE_SUFFIXES):
        return ResourceImage(path=raw, width=width)
    return UnknownImage(raw=raw, width=width)


def _parse_width(value: str | None) -> int:
    try:
        return int(value) if value else 16
    except ValueError:
        return 16


def _decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a data: URI into (content_type, payload bytes)."""
    header, sep, payload = uri[len("data:"):].partition(",")
    if not sep:
        raise ValueError("data URI has no payload separator")

    parts = header.split(";")
    content_type = parts[0].strip().lower() or "text/plain"
    if "base64" in parts[1:]:
        cleaned = "".join(payload.split())
        try:
            return content_type, base64.b64decode(cleaned, validate=True)
        except ValueError as e:
            raise ValueError(f"bad base64 payload ({e})") from e
    return content_type, unquote_to_bytes(payload)
