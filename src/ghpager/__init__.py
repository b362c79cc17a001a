"""
ghpager - Fetch every page of a GitHub REST collection. Merged or streamed.

Quick Start
-----------
    from ghpager import GithubClient

    client = GithubClient()
    issues = client.rest("repos/duckdb/duckdb/issues")   # one JSON array

Streaming
---------
    for row in client.pages("repos/duckdb/duckdb/issues"):
        print(row.url, len(row.body))

    df = client.pages_dataframe("repos/duckdb/duckdb/issues", parse_bodies=True)

Pages are followed through the rel="next" entry of the Link response header,
and only while it stays on the host of the first request.

Configuration
-------------
Set these environment variables (or use a .env file):

    GITHUB_TOKEN          - Bearer token for the default host
    GITHUB_DEFAULT_HOST   - Host for bare paths (default: api.github.com)
    GITHUB_READ_TIMEOUT   - Seconds per request (default: 60)

Exceptions
----------
    InvalidSchemeError          - URL is not https
    MalformedCursorHeaderError  - Link header could not be parsed
    CrossHostCursorError        - Next link points to another host
    UnexpectedShapeError        - Paginated body is not a JSON array
    TransportError              - No response (see category)
    StatusError                 - Non-200 response (see status, body)
    NoCredentialError           - No token stored for the host
"""

__version__ = "0.1.0"

from ghpager.client import GithubClient
from ghpager.config import GithubSettings
from ghpager.credentials import AuthContext, Secret, StaticCredentialStore
from ghpager.links import parse_next_link
from ghpager.merge import fetch_all
from ghpager.stream import PageStream, Row
from ghpager.transport import TransportFailure
from ghpager.urls import RequestTarget, resolve
from ghpager.exceptions import (
    GithubRestError,
    InvalidSchemeError,
    InvalidHostError,
    MalformedCursorHeaderError,
    CrossHostCursorError,
    UnexpectedShapeError,
    TransportError,
    StatusError,
    CredentialError,
    NoCredentialError,
    InvalidCredentialTypeError,
    MissingTokenFieldError,
)

__all__ = [
    "GithubClient",
    "GithubSettings",
    "AuthContext",
    "Secret",
    "StaticCredentialStore",
    "parse_next_link",
    "fetch_all",
    "PageStream",
    "Row",
    "TransportFailure",
    "RequestTarget",
    "resolve",
    "GithubRestError",
    "InvalidSchemeError",
    "InvalidHostError",
    "MalformedCursorHeaderError",
    "CrossHostCursorError",
    "UnexpectedShapeError",
    "TransportError",
    "StatusError",
    "CredentialError",
    "NoCredentialError",
    "InvalidCredentialTypeError",
    "MissingTokenFieldError",
    "__version__",
]
