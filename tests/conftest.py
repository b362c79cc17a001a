"""Shared pytest fixtures for ghpager tests."""

import pytest

from ghpager.client import GithubClient
from ghpager.config import GithubSettings
from ghpager.credentials import Secret, StaticCredentialStore


@pytest.fixture
def mock_settings():
    """Return test settings that ignore any GITHUB_* variables of the host."""
    return GithubSettings(
        default_host="api.github.com",
        token=None,
        read_timeout=5.0,
        max_redirects=3,
        api_version="2022-11-28",
        user_agent="ghpager-tests",
    )


@pytest.fixture
def credentials():
    """Credential store with a bearer token for api.github.com."""
    return StaticCredentialStore({
        "https://api.github.com/": Secret("http", {"bearer_token": "test-token-123"}),
    })


@pytest.fixture
def client(mock_settings, credentials):
    """GithubClient wired to the test settings and credentials."""
    return GithubClient(mock_settings, credentials)


@pytest.fixture
def base_url():
    """Base URL for the mocked API."""
    return "https://api.github.com"

