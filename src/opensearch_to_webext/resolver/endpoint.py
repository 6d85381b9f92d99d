"""Endpoint resolver: picks the search and suggestion <Url> and encodes them."""

from opensearch_to_webext.errors import MalformedInput
from opensearch_to_webext.parser.base import (
    SUGGEST_TYPE,
    EndpointDef,
    Param,
    ResolvedUrl,
    SearchDescriptor,
)


def resolve_primary(descriptor: SearchDescriptor) -> ResolvedUrl:
    """Resolve the first endpoint that is not a suggestion endpoint."""
    for endpoint in descriptor.endpoints:
        if endpoint.type != SUGGEST_TYPE:
            return resolve_endpoint(endpoint)
    raise MalformedInput("No search <Url> (only suggestion endpoints)")


def resolve_suggestion(descriptor: SearchDescriptor) -> ResolvedUrl | None:
    """Resolve the first suggestion endpoint, or None if there is none."""
    for endpoint in descriptor.endpoints:
        if endpoint.type == SUGGEST_TYPE:
            return resolve_endpoint(endpoint)
    return None


def resolve_endpoint(endpoint: EndpointDef) -> ResolvedUrl:
    url = secure_scheme(endpoint.template)
    encoded = encode_params(endpoint.params)
    query_string = None
    post_params = None

    if encoded and endpoint.method == "GET":
        query_string = encoded
        url = append_query(url, encoded)
    elif encoded and endpoint.method == "POST":
        post_params = encoded

    return ResolvedUrl(
        url=url,
        query_string=query_string,
        post_params=post_params,
        vendor_params=[p.model_copy() for p in endpoint.vendor_params],
    )


def secure_scheme(url: str) -> str:
    """Rewrite the first literal 'http:' to 'https:'."""
    return url.replace("http:", "https:", 1)


def encode_params(params: list[Param]) -> str:
    # Values are template tokens like {searchTerms}; they must stay unescaped.
    return "&".join(f"{p.name}={p.value}" for p in params)


def append_query(url: str, query: str) -> str:
    """Append an encoded query string, choosing the join character from the url."""
    if "?" not in url:
        return f"{url}?{query}"
    if url.endswith(("?", "&")):
        return url + query
    return f"{url}&{query}"
