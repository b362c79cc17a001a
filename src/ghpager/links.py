"""Parsing of Link response headers into pagination cursors.

GitHub paginates collections with a header of the form::

    Link: <https://api.github.com/...&page=2>; rel="next",
          <https://api.github.com/...&page=5>; rel="last"
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from ghpager.exceptions import MalformedCursorHeaderError

NEXT_REL = 'rel="next"'


class Link(NamedTuple):
    """One entry of a Link header: the target URL and its parameter tokens."""
    
    url: str
    params: tuple[str, ...]


def parse_links(header: Optional[str]) -> list[Link]:
    """
    Split a Link header into its entries.
    
    Every entry must be a URL wrapped in <...> followed by at least one
    ;-separated parameter. Whitespace around every token is trimmed.
    
    Args:
        header: Raw Link header value, or None when the header is absent
        
    Returns:
        Entries in header order (empty when the header is absent or blank)
        
    Raises:
        MalformedCursorHeaderError: If any entry does not have that shape
    """
    if header is None or not header.strip():
        return []
    
    links = []
    for entry in header.split(","):
        tokens = [token.strip() for token in entry.split(";")]
        url, params = tokens[0], tuple(tokens[1:])
        wrapped = len(url) > 2 and url.startswith("<") and url.endswith(">")
        if not wrapped or not params or not all(params):
            raise MalformedCursorHeaderError(header, entry.strip())
        links.append(Link(url[1:-1].strip(), params))
    return links


def parse_next_link(header: Optional[str]) -> Optional[str]:
    """
    Return the rel="next" URL from a Link header.
    
    Args:
        header: Raw Link header value, or None when the header is absent
        
    Returns:
        The next page URL, or None when there are no more pages
        
    Raises:
        MalformedCursorHeaderError: If the header is structurally invalid
        
    Example:
        >>> parse_next_link('<https://api.github.com/x?page=2>; rel="next"')
        'https://api.github.com/x?page=2'
    """
    for link in parse_links(header):
        if NEXT_REL in link.params:
            return link.url
    return None
