"""Tests for ghpager.urls module."""

import pytest

from ghpager.exceptions import CrossHostCursorError, InvalidHostError, InvalidSchemeError
from ghpager.urls import RequestTarget, resolve


class TestResolve:
    """Tests for resolve()."""
    
    def test_bare_path_uses_default_host(self):
        """A path without a scheme goes to https://<default_host>."""
        target = resolve("owner/repo/issues", "api.example.com")
        
        assert target == RequestTarget("https://api.example.com", "/owner/repo/issues")
    
    def test_bare_path_with_leading_slash(self):
        """A leading slash is not doubled."""
        target = resolve("/owner/repo/issues?state=all", "api.example.com")
        
        assert target.path == "/owner/repo/issues?state=all"
    
    def test_absolute_url_ignores_default_host(self):
        """An https URL supplies its own host."""
        target = resolve("https://api.example.com/users", "ignored")
        
        assert target.base_host == "https://api.example.com"
        assert target.path == "/users"
    
    def test_absolute_url_without_path(self):
        """Path defaults to "/" when nothing follows the host."""
        target = resolve("https://api.example.com", "ignored")
        
        assert target.path == "/"
        assert target.url == "https://api.example.com/"
    
    def test_absolute_url_keeps_port_and_query(self):
        target = resolve("https://localhost:8443/a/b?page=3", "ignored")
        
        assert target.base_host == "https://localhost:8443"
        assert target.path == "/a/b?page=3"
    
    def test_scheme_is_case_insensitive(self):
        target = resolve("HTTPS://api.example.com/x", "ignored")
        
        assert target.base_host == "https://api.example.com"
    
    def test_host_is_lower_cased(self):
        """Host names are case-insensitive; the path is left alone."""
        target = resolve("https://API.GitHub.com/Repos/O/R", "ignored")
        
        assert target.base_host == "https://api.github.com"
        assert target.path == "/Repos/O/R"
    
    def test_default_host_is_lower_cased(self):
        target = resolve("users", "API.GitHub.com")
        
        assert target.base_host == "https://api.github.com"
    
    def test_url_inside_query_is_still_a_path(self):
        """Only a leading scheme makes the input a URL."""
        target = resolve("search/code?q=https://x", "api.github.com")
        
        assert target == RequestTarget("https://api.github.com", "/search/code?q=https://x")
    
    def test_leading_slash_path_with_url_in_query(self):
        target = resolve("/search/code?q=ftp://x", "api.github.com")
        
        assert target.path == "/search/code?q=ftp://x"
    
    def test_default_host_with_scheme_and_trailing_slash(self):
        """A default host given as a URL is normalized."""
        target = resolve("x", "https://ghe.example.com/")
        
        assert target.base_host == "https://ghe.example.com"
        assert target.path == "/x"
    
    @pytest.mark.parametrize("url", ["ftp://x/y", "http://api.github.com/users"])
    def test_rejects_other_schemes(self, url):
        """Only https is accepted."""
        with pytest.raises(InvalidSchemeError) as exc_info:
            resolve(url, "h")
        
        assert exc_info.value.url == url
    
    def test_rejects_non_https_default_host(self):
        with pytest.raises(InvalidSchemeError):
            resolve("users", "http://api.github.com")
    
    def test_rejects_empty_host(self):
        with pytest.raises(InvalidHostError):
            resolve("https:///users", "ignored")
    
    def test_rejects_empty_default_host(self):
        with pytest.raises(InvalidHostError):
            resolve("users", "")


class TestRequestTargetFollow:
    """Tests for RequestTarget.follow()."""
    
    def test_same_host_cursor(self):
        """A cursor on the same host becomes a new target; the old one is unchanged."""
        first = RequestTarget("https://api.github.com", "/repos/o/r/issues")
        
        nxt = first.follow("https://api.github.com/repositories/1/issues?page=2")
        
        assert nxt == RequestTarget("https://api.github.com", "/repositories/1/issues?page=2")
        assert first.path == "/repos/o/r/issues"
    
    def test_other_host_rejected(self):
        first = RequestTarget("https://api.github.com", "/x")
        
        with pytest.raises(CrossHostCursorError) as exc_info:
            first.follow("https://evil.example.com/x?page=2")
        
        assert exc_info.value.cursor == "https://evil.example.com/x?page=2"
    
    def test_host_prefix_is_not_same_host(self):
        """api.github.com.evil.com only shares a prefix with api.github.com."""
        first = RequestTarget("https://api.github.com", "/x")
        
        with pytest.raises(CrossHostCursorError):
            first.follow("https://api.github.com.evil.com/x")
    
    def test_cursor_host_case_ignored(self):
        """A cursor that differs from the target only in host case is same-host."""
        first = RequestTarget("https://api.github.com", "/x")
        
        nxt = first.follow("HTTPS://API.GitHub.com/x?page=2")
        
        assert nxt == RequestTarget("https://api.github.com", "/x?page=2")
    
    def test_scheme_downgrade_rejected(self):
        first = RequestTarget("https://api.github.com", "/x")
        
        with pytest.raises(CrossHostCursorError):
            first.follow("http://api.github.com/x?page=2")
