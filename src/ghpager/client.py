"""GithubClient - main entry point for ghpager."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
import pandas as pd

from ghpager.config import GithubSettings
from ghpager.credentials import AuthContext, CredentialStore, SettingsCredentialStore, resolve_auth
from ghpager.merge import fetch_all
from ghpager.stream import PageStream
from ghpager.transport import open_client
from ghpager.urls import RequestTarget, resolve
from ghpager._utils.dataframe import json_array_to_dataframe, rows_to_dataframe

logger = logging.getLogger(__name__)


class GithubClient:
    """
    Client for paginated GitHub REST collections.
    
    Reads configuration from environment variables (GITHUB_*) automatically.
    Paths without a scheme go to the default host (api.github.com).
    
    Example:
        client = GithubClient()
        issues_json = client.rest("repos/duckdb/duckdb/issues")
        
        for row in client.pages("repos/duckdb/duckdb/issues"):
            print(row.url)
            
    Attributes:
        settings: GithubSettings instance with client configuration
        credentials: Credential store consulted for bearer tokens
    """
    
    def __init__(
        self,
        settings: Optional[GithubSettings] = None,
        credentials: Optional[CredentialStore] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.
        
        Args:
            settings: Optional GithubSettings instance. If not provided,
                     settings are loaded from environment variables.
            credentials: Optional credential store. Defaults to one holding
                        GITHUB_TOKEN for the default host.
            transport: Optional httpx transport shared by every client this
                      object opens (mainly for tests and embedding).
        """
        self.settings = settings or GithubSettings()
        self.credentials = credentials or SettingsCredentialStore(self.settings)
        self._transport = transport
    
    def target(self, path: str) -> RequestTarget:
        """Resolve a path or https URL against the default host."""
        return resolve(path, self.settings.default_host)
    
    def auth_for(self, target: RequestTarget, auth_host: Optional[str] = None) -> AuthContext:
        """
        Look up the bearer token for a target.
        
        Args:
            target: Resolved request target
            auth_host: Host to look the token up under, if not target's own
        """
        return resolve_auth(self.credentials, auth_host or target.base_host)
    
    # -------------------------------------------------------------------------
    # Merge mode
    # -------------------------------------------------------------------------
    
    def rest(
        self,
        path: str,
        authenticate: bool = False,
        auth_host: Optional[str] = None,
    ) -> str:
        """
        Fetch every page of a collection and return one JSON array.
        
        Args:
            path: API path (e.g. "repos/duckdb/duckdb/issues") or https URL
            authenticate: If True, send the bearer token for the host
            auth_host: Host whose token to use instead of the target's;
                      implies authenticate
            
        Returns:
            JSON text: the merged array, or the body of a single page
            
        Raises:
            NoCredentialError: If authenticate is set and no token is stored
            StatusError: If any page answers with a status other than 200
            UnexpectedShapeError: If a paginated page is not a JSON array
            
        Example:
            body = client.rest("orgs/duckdb/repos")
        """
        target = self.target(path)
        token = None
        if authenticate or auth_host:
            token = self.auth_for(target, auth_host).bearer_token
        
        logger.debug("Fetching all pages of %s", target.url)
        with open_client(target.base_host, self.settings, token, self._transport) as client:
            return fetch_all(client, target)
    
    def rest_dataframe(
        self,
        path: str,
        authenticate: bool = False,
        auth_host: Optional[str] = None,
    ) -> pd.DataFrame:
        """
        Fetch every page and return the elements as a pandas DataFrame.
        
        Args:
            path: API path or https URL
            authenticate: If True, send the bearer token for the host
            auth_host: Host whose token to use instead of the target's
            
        Returns:
            DataFrame with one row per array element
        """
        return json_array_to_dataframe(self.rest(path, authenticate, auth_host))
    
    # -------------------------------------------------------------------------
    # Streaming mode
    # -------------------------------------------------------------------------
    
    def pages(self, path: str, auth_host: Optional[str] = None) -> PageStream:
        """
        Open an authenticated stream yielding one Row per page.
        
        Args:
            path: API path or https URL
            auth_host: Host whose token to use instead of the target's
            
        Returns:
            PageStream; iterate it or call next_page()
            
        Raises:
            NoCredentialError: If no secret is stored for the host
            InvalidCredentialTypeError: If the stored secret is not http
            MissingTokenFieldError: If the secret has no bearer_token
        """
        target = self.target(path)
        auth = self.auth_for(target, auth_host)
        return PageStream.open(target, auth, self.settings, self._transport)
    
    def pages_dataframe(
        self,
        path: str,
        auth_host: Optional[str] = None,
        parse_bodies: bool = False,
    ) -> pd.DataFrame:
        """
        Stream every page into a DataFrame with url and body columns.
        
        Args:
            path: API path or https URL
            auth_host: Host whose token to use instead of the target's
            parse_bodies: If True, decode each body from JSON text
            
        Returns:
            DataFrame with one row per page
        """
        with self.pages(path, auth_host) as stream:
            return rows_to_dataframe(stream, parse_bodies=parse_bodies)
