"""Turning user input into a (base host, path) request target."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ghpager.exceptions import CrossHostCursorError, InvalidHostError, InvalidSchemeError

_SCHEME_PREFIX = re.compile(r"([A-Za-z][A-Za-z0-9+.-]*)://")


@dataclass(frozen=True)
class RequestTarget:
    """
    Where a request goes.
    
    Attributes:
        base_host: Scheme and host, e.g. "https://api.github.com" (no trailing slash)
        path: Request path including any query string, always starting with "/"
    """
    
    base_host: str
    path: str
    
    @property
    def url(self) -> str:
        """Absolute URL of this target."""
        return self.base_host + self.path
    
    def follow(self, cursor: str) -> "RequestTarget":
        """
        Derive the target for a rel="next" cursor.
        
        Scheme and host are compared case-insensitively; the rest of the
        URL must match exactly.
        
        Args:
            cursor: Absolute URL taken from a Link header
            
        Returns:
            New RequestTarget on the same host
            
        Raises:
            CrossHostCursorError: If the cursor is not under base_host
        """
        normalized = _normalize_authority(cursor)
        if not normalized.startswith(self.base_host + "/"):
            raise CrossHostCursorError(cursor, self.base_host)
        return RequestTarget(self.base_host, normalized[len(self.base_host):])


def _split_scheme(text: str) -> Optional[tuple[str, str]]:
    """Return (scheme, remainder) if text starts with "<scheme>://", else None."""
    match = _SCHEME_PREFIX.match(text)
    if match is None:
        return None
    return match.group(1), text[match.end():]


def _normalize_authority(url: str) -> str:
    """Lower-case the scheme and host of an absolute URL, leaving the path alone."""
    parts = _split_scheme(url)
    if parts is None:
        return url
    scheme, rest = parts
    host, slash, path = rest.partition("/")
    return f"{scheme.lower()}://{host.lower()}{slash}{path}"


def _base_for_host(host: str, raw: str) -> str:
    host = host.strip().rstrip("/")
    parts = _split_scheme(host)
    if parts is not None:
        scheme, host = parts
        if scheme.lower() != "https":
            raise InvalidSchemeError(raw, scheme)
    name, slash, path = host.partition("/")
    if not name:
        raise InvalidHostError(raw)
    return f"https://{name.lower()}{slash}{path}"


def resolve(raw: str, default_host: str) -> RequestTarget:
    """
    Split a path or absolute URL into a RequestTarget.
    
    A string that does not start with "<scheme>://" is a path on
    default_host, served over https, even if "://" appears later (e.g. in
    a query string). An absolute URL must use https; its path runs from
    the first "/" after the host and defaults to "/". Scheme and host are
    lower-cased.
    
    Args:
        raw: Path like "repos/duckdb/duckdb/issues" or a full https URL
        default_host: Host for bare paths, e.g. "api.github.com"
        
    Returns:
        RequestTarget with base_host lacking a trailing slash and path
        starting with "/"
        
    Raises:
        InvalidSchemeError: If the URL scheme is not https
        InvalidHostError: If no host can be determined
        
    Example:
        >>> resolve("users/octocat/repos", "api.github.com")
        RequestTarget(base_host='https://api.github.com', path='/users/octocat/repos')
    """
    parts = _split_scheme(raw)
    if parts is None:
        path = raw if raw.startswith("/") else "/" + raw
        return RequestTarget(_base_for_host(default_host, raw), path)
    
    scheme, rest = parts
    if scheme.lower() != "https":
        raise InvalidSchemeError(raw, scheme)
    
    host, slash, path = rest.partition("/")
    if not host:
        raise InvalidHostError(raw)
    return RequestTarget(f"https://{host.lower()}", slash + path if slash else "/")
