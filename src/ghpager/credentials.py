"""Bearer token lookup for authenticated requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

from ghpager.config import GithubSettings
from ghpager.exceptions import (
    InvalidCredentialTypeError,
    MissingTokenFieldError,
    NoCredentialError,
)

HTTP_SECRET = "http"
TOKEN_FIELD = "bearer_token"


@dataclass(frozen=True)
class Secret:
    """
    A stored credential.

    Attributes:
        kind: Secret type; bearer secrets have kind "http"
        fields: Secret values, e.g. {"bearer_token": "..."}
    """

    kind: str
    fields: Mapping[str, str] = field(default_factory=dict, repr=False)


class CredentialStore(Protocol):
    """Anything that can find a secret for a scope like "https://api.github.com/"."""

    def lookup(self, scope: str, kind: str = HTTP_SECRET) -> Optional[Secret]:
        ...


class StaticCredentialStore:
    """
    In-memory credential store.

    Scopes are URL prefixes; the longest scope that prefixes the requested
    one wins. The kind argument of lookup() is only a hint: a secret of a
    different kind is still returned so the caller can report it.

    Example:
        store = StaticCredentialStore({
            "https://api.github.com/": Secret("http", {"bearer_token": "ghp_xxx"}),
        })
    """

    def __init__(self, secrets: Optional[Mapping[str, Secret]] = None):
        self._secrets = dict(secrets or {})

    def add(self, scope: str, secret: Secret) -> None:
        self._secrets[scope] = secret

    def lookup(self, scope: str, kind: str = HTTP_SECRET) -> Optional[Secret]:
        matches = [key for key in self._secrets if scope.startswith(key)]
        if not matches:
            return None
        return self._secrets[max(matches, key=len)]


class SettingsCredentialStore(StaticCredentialStore):
    """Credential store holding GITHUB_TOKEN for the default host, if it is set."""

    def __init__(self, settings: GithubSettings):
        super().__init__()
        if settings.token is not None:
            self.add(
                settings.default_base_url + "/",
                Secret(HTTP_SECRET, {TOKEN_FIELD: settings.token.get_secret_value()}),
            )


@dataclass(frozen=True)
class AuthContext:
    """Bearer token resolved for one host."""

    host: str
    bearer_token: str = field(repr=False)


def credential_scope(host: str) -> str:
    """Return the lookup key for a host: scheme, host and a trailing slash."""
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"https://{host}"
    return host + "/"


def resolve_auth(store: CredentialStore, host: str) -> AuthContext:
    """
    Look up the bearer token for a host.

    Args:
        store: Credential store to query
        host: Base host such as "https://api.github.com" (scheme optional)

    Returns:
        AuthContext for the host

    Raises:
        NoCredentialError: If the store has nothing for the host
        InvalidCredentialTypeError: If the secret is not an http secret
        MissingTokenFieldError: If the secret has no bearer_token
    """
    scope = credential_scope(host)
    secret = store.lookup(scope, kind=HTTP_SECRET)
    if secret is None:
        raise NoCredentialError(scope)
    if secret.kind != HTTP_SECRET:
        raise InvalidCredentialTypeError(scope, secret.kind)
    token = secret.fields.get(TOKEN_FIELD)
    if not token:
        raise MissingTokenFieldError(scope)
    return AuthContext(host=scope.rstrip("/"), bearer_token=token)
