"""HTTP transport setup and classification of request failures."""

from __future__ import annotations

import logging
import ssl
from enum import Enum
from typing import Optional, Union

import httpx

from ghpager.config import GithubSettings
from ghpager.exceptions import GithubRestError, StatusError, TransportError

logger = logging.getLogger(__name__)


class TransportFailure(str, Enum):
    """
    Why a request produced no HTTP response.

    Attributes:
        CONNECTION: Could not connect (refused, DNS, connect timeout, proxy)
        TLS: TLS handshake or certificate verification failed
        REDIRECT_LIMIT: More redirects than max_redirects
        CANCELED: The response stream was closed before it was read
        MULTIPART: Unsupported characters in a multipart boundary
        COMPRESSION: The response body could not be decompressed
        READ: Error or timeout while reading the response
        WRITE: Error or timeout while sending the request
        UNKNOWN: Anything else
    """
    CONNECTION = "connection"
    TLS = "tls"
    REDIRECT_LIMIT = "redirect_limit"
    CANCELED = "canceled"
    MULTIPART = "multipart"
    COMPRESSION = "compression"
    READ = "read"
    WRITE = "write"
    UNKNOWN = "unknown"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    TransportFailure.CONNECTION: "Connection error.",
    TransportFailure.TLS: "SSL connection failed.",
    TransportFailure.REDIRECT_LIMIT: "Too many redirects.",
    TransportFailure.CANCELED: "Request was canceled.",
    TransportFailure.MULTIPART: "Unsupported characters in multipart boundary.",
    TransportFailure.COMPRESSION: "Error during compression.",
    TransportFailure.READ: "Error reading response.",
    TransportFailure.WRITE: "Error writing request.",
    TransportFailure.UNKNOWN: "Unknown error.",
}

# Checked in order; subclasses must come before their bases.
_EXCEPTION_CATEGORIES = [
    (httpx.TooManyRedirects, TransportFailure.REDIRECT_LIMIT),
    (httpx.DecodingError, TransportFailure.COMPRESSION),
    (httpx.StreamClosed, TransportFailure.CANCELED),
    (httpx.ConnectError, TransportFailure.CONNECTION),
    (httpx.ConnectTimeout, TransportFailure.CONNECTION),
    (httpx.PoolTimeout, TransportFailure.CONNECTION),
    (httpx.ProxyError, TransportFailure.CONNECTION),
    (httpx.UnsupportedProtocol, TransportFailure.CONNECTION),
    (httpx.ReadError, TransportFailure.READ),
    (httpx.ReadTimeout, TransportFailure.READ),
    (httpx.RemoteProtocolError, TransportFailure.READ),
    (httpx.WriteError, TransportFailure.WRITE),
    (httpx.WriteTimeout, TransportFailure.WRITE),
    (httpx.LocalProtocolError, TransportFailure.WRITE),
]

_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)

HttpOutcome = Union[httpx.Response, BaseException]


def _caused_by_ssl(exc: BaseException) -> bool:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_exception(exc: BaseException) -> TransportFailure:
    """
    Map a request exception to exactly one TransportFailure.

    Args:
        exc: Exception raised while sending a request

    Returns:
        The matching category, UNKNOWN when nothing matches
    """
    if _caused_by_ssl(exc):
        return TransportFailure.TLS
    for exc_type, category in _EXCEPTION_CATEGORIES:
        if isinstance(exc, exc_type):
            return category
    return TransportFailure.UNKNOWN


def classify(
    outcome: HttpOutcome,
    request_kind: str = "GET",
    url: str = "",
) -> Optional[GithubRestError]:
    """
    Turn the outcome of one request into the error it represents.

    Args:
        outcome: The httpx.Response received, or the exception raised
        request_kind: HTTP method, used in the error message
        url: Requested URL, kept on the error for diagnostics

    Returns:
        None for a 200 response, otherwise a StatusError or TransportError
    """
    if isinstance(outcome, httpx.Response):
        if outcome.status_code == 200:
            return None
        return StatusError(outcome.status_code, outcome.text, request_kind, url)
    return TransportError(classify_exception(outcome), request_kind, url)


def open_client(
    base_host: str,
    settings: GithubSettings,
    token: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create the single httpx.Client a pager uses for all of its requests.

    Args:
        base_host: Scheme and host the client is bound to
        settings: GithubSettings supplying timeout, redirect limit and headers
        token: Bearer token; omitted for anonymous requests
        transport: Optional httpx transport (e.g. httpx.MockTransport)

    Returns:
        Configured httpx.Client; the caller is responsible for closing it
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": settings.user_agent,
        "X-GitHub-Api-Version": settings.api_version,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return httpx.Client(
        base_url=base_host,
        headers=headers,
        timeout=settings.read_timeout,
        follow_redirects=True,
        max_redirects=settings.max_redirects,
        transport=transport,
    )


def get(client: httpx.Client, url: str, request_kind: str = "GET") -> httpx.Response:
    """
    Perform one request and return the response if its status is 200.

    Args:
        client: Client from open_client()
        url: Absolute URL to request
        request_kind: HTTP method

    Returns:
        The successful httpx.Response

    Raises:
        StatusError: If the server answered with any other status
        TransportError: If no response was received
    """
    outcome: HttpOutcome
    try:
        outcome = client.request(request_kind, url)
    except _REQUEST_ERRORS as exc:
        outcome = exc

    error = classify(outcome, request_kind, url)
    if error is not None:
        logger.debug("%s %s failed: %s", request_kind, url, error)
        if isinstance(outcome, BaseException):
            raise error from outcome
        raise error

    logger.debug("%s %s -> %d (%d bytes)", request_kind, url, outcome.status_code, len(outcome.content))
    return outcome
