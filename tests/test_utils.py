"""
Unit tests for request preparation utilities
"""

import io
from datetime import datetime, timezone

import pytest
import requests

from aws_signing_client.utils import (
    escape_path,
    normalize_url,
    read_body,
    buffer_body,
    format_rfc3339_timestamp,
    parse_rfc3339_timestamp,
    utc_now,
)


class TestEscapePath:
    """Test strict path escaping"""

    def test_unreserved_characters_untouched(self):
        """Test that unreserved characters and separators survive"""
        assert escape_path("/abc-DEF_123.~/x") == "/abc-DEF_123.~/x"

    def test_percent_is_escaped(self):
        """Test that existing escapes are encoded again"""
        assert escape_path("/%2Cfoo") == "/%252Cfoo"

    def test_reserved_characters_and_spaces(self):
        """Test that reserved characters and spaces are escaped"""
        assert escape_path("/a b,c:d") == "/a%20b%2Cc%3Ad"

    def test_encode_separator(self):
        """Test escaping of the path separator"""
        assert escape_path("/a/b", encode_sep=True) == "%2Fa%2Fb"


class TestNormalizeUrl:
    """Test scheme and path normalization"""

    def test_scheme_forced_to_https(self):
        """Test that http becomes https"""
        assert normalize_url("http://example.com/path?q=1") == "https://example.com/path?q=1"

    def test_https_untouched(self):
        """Test that an https URL without an encoded comma is unchanged"""
        url = "https://example.com/a%20b?x=%2C"
        assert normalize_url(url) == url

    def test_encoded_comma_in_path_is_reescaped(self):
        """Test that %2C in the path is escaped again"""
        assert normalize_url("http://example.com/%2Cfoo") == "https://example.com/%252Cfoo"

    def test_lowercase_sequence_not_matched(self):
        """Test that only the uppercase sequence triggers escaping"""
        assert normalize_url("https://example.com/%2cfoo") == "https://example.com/%2cfoo"

    @pytest.mark.parametrize("url, expected", [
        ("http://h/p?", "https://h/p?"),
        ("http://h/p#", "https://h/p#"),
        ("http://h/p?#", "https://h/p?#"),
        ("http://example.com/%2Cfoo?", "https://example.com/%252Cfoo?"),
    ])
    def test_empty_query_and_fragment_kept(self, url, expected):
        """Test that empty delimiters are not dropped from the URL"""
        assert normalize_url(url) == expected

    def test_query_and_fragment_kept_when_path_escaped(self):
        """Test that only the path is rewritten next to the query and fragment"""
        url = "http://user@example.com:8443/%2Cfoo?q=%2C&x=#frag%2C"
        assert normalize_url(url) == "https://user@example.com:8443/%252Cfoo?q=%2C&x=#frag%2C"

    @pytest.mark.parametrize("url", [
        "http://example.com/%2Cfoo",
        "https://example.com/plain/path",
        "http://example.com/%2C%2C/a?q=%2C",
    ])
    def test_idempotent(self, url):
        """Test that normalizing twice equals normalizing once"""
        once = normalize_url(url)
        assert normalize_url(once) == once


class TestTimestamps:
    """Test timestamp helpers"""

    def test_format_rfc3339(self):
        """Test RFC 3339 formatting"""
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert format_rfc3339_timestamp(value) == "2024-01-02T03:04:05Z"

    def test_parse_round_trip(self):
        """Test that parsing recovers the formatted time"""
        now = utc_now()
        assert parse_rfc3339_timestamp(format_rfc3339_timestamp(now)) == now

    def test_utc_now_is_aware(self):
        """Test that utc_now carries UTC and no microseconds"""
        now = utc_now()
        assert now.tzinfo is timezone.utc
        assert now.microsecond == 0


class TestReadBody:
    """Test body reading"""

    def test_bytes(self):
        assert read_body(b"data") == b"data"

    def test_str_encoded_as_utf8(self):
        assert read_body("héllo") == "héllo".encode("utf-8")

    def test_file_like(self):
        assert read_body(io.BytesIO(b"from file")) == b"from file"

    def test_iterable_of_chunks(self):
        assert read_body(iter([b"ab", "cd", b"ef"])) == b"abcdef"

    def test_read_error_propagates(self):
        """Test that read errors are not wrapped"""
        class BrokenReader:
            def read(self):
                raise OSError("disk on fire")

        with pytest.raises(OSError, match="disk on fire"):
            read_body(BrokenReader())


class TestBufferBody:
    """Test in-place body buffering"""

    def test_no_body(self):
        """Test that requests without body are left alone"""
        request = requests.Request("GET", "https://example.com/").prepare()
        assert buffer_body(request) is None
        assert request.body is None
        assert "Content-Length" not in request.headers

    def test_generator_body(self):
        """Test that chunked bodies become sized bytes"""
        request = requests.Request("PUT", "https://example.com/", data=iter([b"ab", b"cd"])).prepare()
        assert request.headers.get("Transfer-Encoding") == "chunked"

        reader = buffer_body(request)

        assert request.body == b"abcd"
        assert reader.read() == b"abcd"
        assert "Transfer-Encoding" not in request.headers
        assert request.headers["Content-Length"] == "4"

    def test_reader_is_independent(self):
        """Test that consuming the reader leaves the body intact"""
        request = requests.Request("POST", "https://example.com/", data=b"payload").prepare()
        reader = buffer_body(request)
        reader.read()
        assert request.body == b"payload"
        assert read_body(request.body) == read_body(request.body) == b"payload"
