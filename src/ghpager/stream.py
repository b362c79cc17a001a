"""Streaming mode: fetch one page per call, following rel="next" links."""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple, Optional

import httpx

from ghpager.config import GithubSettings
from ghpager.credentials import AuthContext
from ghpager.links import parse_next_link
from ghpager.transport import get, open_client
from ghpager.urls import RequestTarget

logger = logging.getLogger(__name__)


class Row(NamedTuple):
    """One fetched page: the URL requested and the raw JSON body."""

    url: str
    body: str


class PageStream:
    """
    Pull-based iterator over the pages of a collection.

    Only one page is held at a time. Each call to next_page() performs at
    most one request; pages arrive in the order the Link headers declare.

    Once the last page has been returned the stream is exhausted: every
    later call returns None (or raises StopIteration when iterated) and the
    HTTP client is closed. If a call fails, the stream is failed for good
    and every later call raises the same error without touching the network.

    Example:
        with PageStream.open(target, auth, settings) as stream:
            for row in stream:
                print(row.url, len(row.body))
    """

    def __init__(self, client: httpx.Client, target: RequestTarget):
        """
        Wrap an already configured client.

        Args:
            client: httpx.Client owned by this stream from now on
            target: First page to fetch
        """
        self._client = client
        self._origin = target
        self._current_url: Optional[str] = target.url
        self._failure: Optional[BaseException] = None

    @classmethod
    def open(
        cls,
        target: RequestTarget,
        auth: AuthContext,
        settings: GithubSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "PageStream":
        """
        Create a stream with its own authenticated client.

        Args:
            target: First page to fetch
            auth: Bearer token for target's host
            settings: GithubSettings for timeout, redirects and headers
            transport: Optional httpx transport override

        Returns:
            Stream positioned before the first page
        """
        client = open_client(target.base_host, settings, auth.bearer_token, transport)
        return cls(client, target)

    @property
    def current_url(self) -> Optional[str]:
        """URL the next call will fetch, or None once exhausted."""
        return self._current_url

    @property
    def exhausted(self) -> bool:
        return self._current_url is None and self._failure is None

    def next_page(self) -> Optional[Row]:
        """
        Fetch the next page.

        Returns:
            Row for the fetched page, or None when there are no more pages

        Raises:
            StatusError: If the server answers with a status other than 200
            TransportError: If the request fails without a response
            CrossHostCursorError: If the page links to another host
            MalformedCursorHeaderError: If the Link header cannot be parsed
        """
        if self._failure is not None:
            raise self._failure
        if self._current_url is None:
            return None

        url = self._current_url
        try:
            response = get(self._client, url)
            cursor = parse_next_link(response.headers.get("link"))
            if cursor is not None:
                self._origin.follow(cursor)
        except Exception as exc:
            self._failure = exc
            self.close()
            raise

        self._current_url = cursor
        if cursor is None:
            logger.debug("Last page reached at %s", url)
            self.close()
        return Row(url, response.text)

    def close(self) -> None:
        """Release the HTTP client. Safe to call more than once."""
        self._client.close()

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        row = self.next_page()
        if row is None:
            raise StopIteration
        return row

    def __enter__(self) -> "PageStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
