"""Tests for payload serialization and URL helpers."""

import urllib.parse as parser

import pytest
from yarl import URL

from linnet import build_url, query_param, serialize
from linnet.serialize import default_content_type
from linnet.types import CONTENT_TYPE_FORM_URLENCODED, CONTENT_TYPE_JSON


class TestQueryParam:
    """Tests for query_param()."""

    def test_space_is_percent_encoded(self) -> None:
        """Test that a space becomes %20 and decodes back."""
        pair = query_param("a", "b c")
        assert pair == "a=b%20c"
        assert parser.parse_qsl(pair) == [("a", "b c")]

    def test_key_and_value_encoded_independently(self) -> None:
        """Test that reserved characters on both sides are escaped."""
        assert query_param("k&", "a=b/c") == "k%26=a%3Db%2Fc"

    def test_unreserved_marks_are_kept(self) -> None:
        """Test the encodeURIComponent unreserved set."""
        assert query_param("x", "-_.!~*'()") == "x=-_.!~*'()"

    def test_non_string_values(self) -> None:
        """Test that values are converted with str()."""
        assert query_param("page", 2) == "page=2"

    def test_unicode(self) -> None:
        """Test that non-ASCII text is UTF-8 percent-encoded."""
        assert query_param("name", "é") == "name=%C3%A9"


class TestSerialize:
    """Tests for serialize()."""

    def test_string_passes_through(self) -> None:
        """Test that a string payload is returned unchanged."""
        assert serialize("a=1&b= 2") == "a=1&b= 2"

    def test_empty_mapping(self) -> None:
        """Test that an empty mapping gives an empty string."""
        assert serialize({}) == ""

    def test_none(self) -> None:
        """Test that a missing payload gives an empty string."""
        assert serialize(None) == ""

    def test_mapping_keeps_insertion_order(self) -> None:
        """Test that pairs follow the mapping's order."""
        assert serialize({"b": "2", "a": "1 1"}) == "b=2&a=1%201"

    def test_unsupported_type(self) -> None:
        """Test that lists are rejected."""
        with pytest.raises(TypeError, match="list"):
            serialize(["a", "b"])  # type: ignore[arg-type]


class TestBuildUrl:
    """Tests for build_url()."""

    def test_question_mark_without_query(self) -> None:
        """Test that ? starts a new query string."""
        assert build_url("http://x/y", "q=1") == "http://x/y?q=1"

    def test_ampersand_with_query(self) -> None:
        """Test that & extends an existing query string."""
        assert build_url("http://x/y?z=1", "raw") == "http://x/y?z=1&raw"

    def test_yarl_url(self) -> None:
        """Test that yarl URLs are accepted."""
        assert build_url(URL("http://x/y"), "q=1") == "http://x/y?q=1"


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("GET", CONTENT_TYPE_JSON),
        ("POST", CONTENT_TYPE_FORM_URLENCODED),
        ("PUT", CONTENT_TYPE_JSON),
        ("DELETE", CONTENT_TYPE_JSON),
    ],
)
def test_default_content_type(method: str, expected: str) -> None:
    """Test the Content-Type defaults per method."""
    assert default_content_type(method) == expected
