"""Tests for ghpager.links module."""

import pytest

from ghpager.exceptions import MalformedCursorHeaderError
from ghpager.links import Link, parse_links, parse_next_link


GITHUB_HEADER = (
    '<https://api.github.com/repositories/1300192/issues?page=2>; rel="next", '
    '<https://api.github.com/repositories/1300192/issues?page=515>; rel="last"'
)


class TestParseNextLink:
    """Tests for parse_next_link()."""
    
    def test_github_style_header(self):
        """Returns the rel="next" URL without brackets."""
        assert parse_next_link(GITHUB_HEADER) == (
            "https://api.github.com/repositories/1300192/issues?page=2"
        )
    
    def test_next_entry_not_first(self):
        """Entry order does not matter."""
        header = (
            '<https://api.github.com/x?page=1>; rel="prev", '
            '<https://api.github.com/x?page=1>; rel="first", '
            '<https://api.github.com/x?page=3>; rel="next"'
        )
        assert parse_next_link(header) == "https://api.github.com/x?page=3"
    
    def test_extra_params_and_whitespace(self):
        """Extra parameters and surrounding whitespace are ignored."""
        header = '  < https://api.github.com/x?page=2 > ;  type="application/json" ;rel="next"  '
        assert parse_next_link(header) == "https://api.github.com/x?page=2"
    
    def test_no_next_entry_is_end(self):
        """A header without rel="next" means the last page."""
        header = (
            '<https://api.github.com/x?page=1>; rel="prev", '
            '<https://api.github.com/x?page=1>; rel="first"'
        )
        assert parse_next_link(header) is None
    
    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header_is_end(self, header):
        assert parse_next_link(header) is None
    
    def test_rel_must_match_exactly(self):
        """rel=next without quotes, or a rel list, is not a next link."""
        header = (
            '<https://api.github.com/x?page=2>; rel=next, '
            '<https://api.github.com/x?page=3>; rel="next last"'
        )
        assert parse_next_link(header) is None
    
    @pytest.mark.parametrize("header", [
        'https://api.github.com/x?page=2; rel="next"',
        '<https://api.github.com/x?page=2; rel="next"',
        '<https://api.github.com/x?page=2>',
        '<https://api.github.com/x?page=2>; rel="next",',
        '<https://api.github.com/x?page=2>;; rel="next"',
        '<>; rel="next"',
    ])
    def test_malformed_entries_raise(self, header):
        """Structurally broken entries are errors, not skipped."""
        with pytest.raises(MalformedCursorHeaderError) as exc_info:
            parse_next_link(header)
        
        assert exc_info.value.header == header
    
    def test_malformed_entry_after_next_still_raises(self):
        """The whole header is validated, not just up to the match."""
        header = '<https://api.github.com/x?page=2>; rel="next", garbage'
        
        with pytest.raises(MalformedCursorHeaderError) as exc_info:
            parse_next_link(header)
        
        assert exc_info.value.entry == "garbage"


class TestParseLinks:
    """Tests for parse_links()."""
    
    def test_returns_entries_in_order(self):
        links = parse_links(GITHUB_HEADER)
        
        assert links == [
            Link("https://api.github.com/repositories/1300192/issues?page=2", ('rel="next"',)),
            Link("https://api.github.com/repositories/1300192/issues?page=515", ('rel="last"',)),
        ]
