"""Locate the descriptor root element inside raw file text."""

import re

from opensearch_to_webext.errors import MalformedInput

ROOT_PATTERN = re.compile(r"<(SearchPlugin|OpenSearchDescription)\b")


def locate_root(text: str) -> tuple[str, str]:
    """Find the first descriptor root and drop everything before it.

    Returns: (dialect, markup) where dialect is 'SearchPlugin' or
    'OpenSearchDescription'.
    """
    match = ROOT_PATTERN.search(text)
    if not match:
        raise MalformedInput("No <SearchPlugin> or <OpenSearchDescription> element found")
    return match.group(1), text[match.start():]
