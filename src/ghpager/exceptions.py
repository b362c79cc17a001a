"""Exception hierarchy for ghpager."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghpager.transport import TransportFailure


BODY_SNIPPET_LENGTH = 200


def _snippet(body: str) -> str:
    if len(body) <= BODY_SNIPPET_LENGTH:
        return body
    return body[:BODY_SNIPPET_LENGTH] + "..."


class GithubRestError(Exception):
    """Base exception for all ghpager errors."""
    pass


class InvalidSchemeError(GithubRestError):
    """
    The URL uses a scheme other than https.
    
    Only https:// URLs (or bare paths against the default host) are fetched.
    """
    
    def __init__(self, url: str, scheme: str):
        super().__init__(f"Unsupported URL scheme {scheme!r} in {url!r}; only https is allowed")
        self.url = url
        self.scheme = scheme


class InvalidHostError(GithubRestError):
    """The URL (or the configured default host) has no host portion."""
    
    def __init__(self, url: str):
        super().__init__(f"No host found in {url!r}")
        self.url = url


class MalformedCursorHeaderError(GithubRestError):
    """
    A Link header entry is not of the form <URL>; param; ...
    
    Raised instead of skipping the entry, so a broken header can never
    silently cut pagination short.
    """
    
    def __init__(self, header: str, entry: str):
        super().__init__(f"Malformed Link header entry {entry!r} in {header!r}")
        self.header = header
        self.entry = entry


class CrossHostCursorError(GithubRestError):
    """A rel="next" link points outside the host the first page came from."""
    
    def __init__(self, cursor: str, base_host: str):
        super().__init__(f"Invalid rel=\"next\" link {cursor!r}: not under {base_host}/")
        self.cursor = cursor
        self.base_host = base_host


class UnexpectedShapeError(GithubRestError):
    """A paginated response body is not a JSON array."""
    
    def __init__(self, url: str, body: str):
        super().__init__(f"Expected JSON array from {url}, got: {_snippet(body)}")
        self.url = url
        self.body = body


class TransportError(GithubRestError):
    """
    The request never produced an HTTP response.
    
    The category attribute names the failure (connection, TLS, redirect
    limit, read, write, ...). Timeouts are not retried.
    """
    
    def __init__(self, category: "TransportFailure", request_kind: str = "GET", url: str = ""):
        message = f"HTTP {request_kind} request failed. {category.message}"
        if url:
            message += f" URL: {url}"
        super().__init__(message)
        self.category = category
        self.request_kind = request_kind
        self.url = url


class StatusError(GithubRestError):
    """
    The server answered with a status other than 200.
    
    The raw status and body are available on this exception.
    """
    
    def __init__(self, status: int, body: str, request_kind: str = "GET", url: str = ""):
        message = f"HTTP {request_kind} request failed. Status: {status}, Reason: {_snippet(body)}"
        if url:
            message += f" URL: {url}"
        super().__init__(message)
        self.status = status
        self.body = body
        self.request_kind = request_kind
        self.url = url


class CredentialError(GithubRestError):
    """Base class for credential store lookup failures."""
    
    def __init__(self, message: str, scope: str):
        super().__init__(message)
        self.scope = scope


class NoCredentialError(CredentialError):
    """
    The credential store has no secret for the host.
    
    Set GITHUB_TOKEN or pass a credential store holding a secret for it.
    """
    
    def __init__(self, scope: str):
        super().__init__(f"No http secret found for {scope}", scope)


class InvalidCredentialTypeError(CredentialError):
    """The secret found for the host is not an http bearer secret."""
    
    def __init__(self, scope: str, kind: str):
        super().__init__(f"Secret for {scope} has type {kind!r}, expected 'http'", scope)
        self.kind = kind


class MissingTokenFieldError(CredentialError):
    """The http secret for the host has no bearer_token field."""
    
    def __init__(self, scope: str):
        super().__init__(f"Secret for {scope} has no bearer_token", scope)
