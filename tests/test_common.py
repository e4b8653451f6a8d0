"""Tests for common utilities."""

import logging

import pytest
from shortlink.common.validators import is_valid_url, is_success_status
from shortlink.common.url_builder import (
    URLEncodingError,
    URLTooLongError,
    encode_target_url,
    build_api_url,
    normalize_short_url,
)
from shortlink.common.logging_config import setup_logging


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://tinyurl.com/abc123")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("Error")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://")
        assert not valid
        assert "domain" in error.lower()

        valid, error = is_valid_url("<html>\n<body>oops</body>")
        assert not valid
        assert "whitespace" in error.lower()

    def test_success_status_bounds(self):
        """Only 2xx and 3xx count as resolved."""
        assert is_success_status(200)
        assert is_success_status(301)
        assert is_success_status(399)

        assert not is_success_status(199)
        assert not is_success_status(400)
        assert not is_success_status(404)
        assert not is_success_status(500)


class TestURLBuilder:
    """Test URL building utilities."""

    def test_encode_escapes_reserved_characters(self):
        """Reserved characters are all escaped."""
        encoded = encode_target_url("https://example.com/a b?x=1&y=2#frag")

        assert encoded == "https%3A%2F%2Fexample.com%2Fa%20b%3Fx%3D1%26y%3D2%23frag"

    def test_encode_keeps_unreserved_characters(self):
        """Letters, digits and -._~ pass through."""
        assert encode_target_url("Az09-._~") == "Az09-._~"

    def test_encode_non_ascii_as_utf8(self):
        """Non-ASCII text is escaped byte by byte."""
        assert encode_target_url("https://例え.jp") == "https%3A%2F%2F%E4%BE%8B%E3%81%88.jp"

    def test_encode_length_limit(self):
        """The limit applies to the encoded form and is inclusive."""
        assert len(encode_target_url("a" * 900)) == 900

        with pytest.raises(URLTooLongError):
            encode_target_url("a" * 901)

        # 300 slashes become 900 bytes once escaped
        assert len(encode_target_url("/" * 300)) == 900
        with pytest.raises(URLTooLongError):
            encode_target_url("/" * 301)

    def test_encode_custom_limit(self):
        """Test a configured limit."""
        with pytest.raises(URLTooLongError, match="max 10"):
            encode_target_url("https://example.com", max_length=10)

    def test_encode_failures(self):
        """Non-text and unencodable input raise URLEncodingError."""
        with pytest.raises(URLEncodingError):
            encode_target_url(None)

        with pytest.raises(URLEncodingError):
            encode_target_url(b"https://example.com")

        with pytest.raises(URLEncodingError):
            encode_target_url("https://example.com/\udcff")

    def test_encoding_errors_are_value_errors(self):
        """Both failure types can be handled as ValueError."""
        assert issubclass(URLEncodingError, ValueError)
        assert issubclass(URLTooLongError, ValueError)

    def test_build_api_url(self):
        """Test API request URL building."""
        url = build_api_url(
            "https://tinyurl.com/api-create.php",
            "https%3A%2F%2Fexample.com"
        )

        assert url == "https://tinyurl.com/api-create.php?url=https%3A%2F%2Fexample.com"

    def test_build_api_url_with_existing_query(self):
        """Test API base URL that already has a query string."""
        url = build_api_url("https://short.example/api?format=text", "abc")

        assert url == "https://short.example/api?format=text&url=abc"

    def test_normalize_short_url(self):
        """Test short link normalization."""
        assert normalize_short_url("https://tinyurl.com/abc") == "https://tinyurl.com/abc"
        assert normalize_short_url("  https://tinyurl.com/abc\n") == "https://tinyurl.com/abc"
        assert normalize_short_url("tinyurl.com/abc") == "http://tinyurl.com/abc"
        assert normalize_short_url("   ") == ""


class TestLoggingConfig:
    """Test logging setup."""

    def test_setup_logging_level(self):
        """Test logger level and handler."""
        logger = setup_logging(level="DEBUG")

        assert logger.name == "shortlink"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_logging_replaces_handlers(self):
        """Calling setup twice does not duplicate handlers."""
        setup_logging(level="INFO")
        logger = setup_logging(level="WARNING")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_setup_logging_unknown_level(self):
        """Unknown level names fall back to WARNING."""
        logger = setup_logging(level="chatty")

        assert logger.level == logging.WARNING

    def test_setup_logging_file(self, tmp_path):
        """Test file handler."""
        log_file = tmp_path / "shortlink.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)

        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert '"level": "INFO"' in content
        assert '"message": "hello"' in content

        setup_logging(level="WARNING")
