"""Configuration management via environment variables."""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GithubSettings(BaseSettings):
    """
    GitHub REST client configuration.
    
    All values are read from environment variables prefixed with GITHUB_.
    A .env file in the current directory is loaded automatically.
    
    Attributes:
        default_host: Host used when a bare path is requested
        token: Bearer token for the default host (stored securely)
        read_timeout: Seconds to wait on each request before giving up
        max_redirects: Redirects followed before the request fails
        api_version: Value sent as X-GitHub-Api-Version
        user_agent: Value sent as User-Agent
    
    Example:
        # GITHUB_TOKEN=ghp_xxx
        # GITHUB_DEFAULT_HOST=ghe.example.com
        
        settings = GithubSettings()
        print(settings.default_base_url)
    """
    
    default_host: str = "api.github.com"
    token: Optional[SecretStr] = None
    read_timeout: float = 60.0
    max_redirects: int = 20
    api_version: str = "2022-11-28"
    user_agent: str = "ghpager"
    
    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    @property
    def default_base_url(self) -> str:
        """Absolute URL of the default host, without a trailing slash."""
        host = self.default_host.rstrip("/")
        if "://" in host:
            return host
        return f"https://{host}"
