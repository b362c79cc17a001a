"""Merge mode: fetch every page and splice them into one JSON array."""

import logging

import httpx

from ghpager.exceptions import UnexpectedShapeError
from ghpager.links import parse_next_link
from ghpager.transport import get
from ghpager.urls import RequestTarget

logger = logging.getLogger(__name__)


def is_json_array(body: str) -> bool:
    """Cheap syntactic check: "[" ... "]", at least the two brackets."""
    return len(body) >= 2 and body[0] == "[" and body[-1] == "]"


def fetch_all(client: httpx.Client, target: RequestTarget) -> str:
    """
    Fetch target and every page after it, returning one JSON array.
    
    A single page is returned verbatim, whatever JSON it holds. Once a
    rel="next" link is present, every page must be a JSON array and the
    arrays are concatenated in link order. Nothing is returned if any
    page fails.
    
    Args:
        client: httpx.Client bound to target.base_host
        target: First page to fetch
        
    Returns:
        Body of the single page, or the merged JSON array text
        
    Raises:
        StatusError: If any page answers with a status other than 200
        TransportError: If any request fails without a response
        UnexpectedShapeError: If a paginated body is not a JSON array
        CrossHostCursorError: If a next link leaves target's host
        MalformedCursorHeaderError: If a Link header cannot be parsed
        
    Example:
        with open_client(target.base_host, settings) as client:
            body = fetch_all(client, target)
    """
    response = get(client, target.url)
    body = response.text
    cursor = parse_next_link(response.headers.get("link"))
    if cursor is None:
        return body
    
    if not is_json_array(body):
        raise UnexpectedShapeError(target.url, body)
    
    items = [body[1:-1]]
    pages = 1
    while cursor is not None:
        target = target.follow(cursor)
        response = get(client, target.url)
        page = response.text
        if not is_json_array(page):
            raise UnexpectedShapeError(target.url, page)
        cursor = parse_next_link(response.headers.get("link"))
        items.append(page[1:-1])
        pages += 1
        logger.debug("Merged page %d from %s", pages, target.url)
    
    # Empty pages contribute nothing, so "[]" never leaves a stray comma.
    return "[" + ",".join(item for item in items if item.strip()) + "]"
