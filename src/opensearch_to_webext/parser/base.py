"""Unified data models for parsed search descriptors.

Both descriptor dialects (Mozilla SearchPlugin and OpenSearch 1.1) are
converted into these models for downstream resolution and bundling.
"""

from typing import Literal, Union

from pydantic import BaseModel

SUGGEST_TYPE = "application/x-suggestions+json"


class Param(BaseModel):
    """A standard query parameter (<Param name="..." value="..."/>)."""

    name: str
    value: str


class VendorParam(BaseModel):
    """An engine-specific parameter (<MozParam/>), passed through untouched."""

    name: str
    value: str
    purpose: str | None = None


class EndpointDef(BaseModel):
    """A single <Url> element."""

    template: str
    type: str = "text/html"
    method: Literal["GET", "POST"] = "GET"
    params: list[Param] = []
    vendor_params: list[VendorParam] = []


class RemoteImage(BaseModel):
    kind: Literal["remote"] = "remote"
    url: str
    width: int = 16


class InlineImage(BaseModel):
    kind: Literal["inline"] = "inline"
    content_type: str
    data: bytes
    width: int = 16


class ResourceImage(BaseModel):
    kind: Literal["resource"] = "resource"
    path: str
    width: int = 16


class UnknownImage(BaseModel):
    kind: Literal["unknown"] = "unknown"
    raw: str
    width: int = 16


ImageRef = Union[RemoteImage, InlineImage, ResourceImage, UnknownImage]


class SearchDescriptor(BaseModel):
    """One parsed descriptor file."""

    short_name: str
    description: str
    image: ImageRef | None = None
    endpoints: list[EndpointDef]
    dialect: str = "SearchPlugin"
    input_encoding: str | None = None


class ResolvedUrl(BaseModel):
    """An endpoint projected into the shape the manifest needs."""

    url: str
    query_string: str | None = None
    post_params: str | None = None
    vendor_params: list[VendorParam] = []
