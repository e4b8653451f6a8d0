"""URL building utilities for shortlink."""

from urllib.parse import quote


class URLEncodingError(ValueError):
    """The URL could not be percent-encoded."""


class URLTooLongError(ValueError):
    """The percent-encoded URL exceeds the API limit."""


def encode_target_url(url: str, max_length: int = 900) -> str:
    """Percent-encode a URL for use as a query parameter value.

    Everything outside the unreserved set (letters, digits, ``-._~``) is
    escaped, including ``/`` and ``:``.

    Args:
        url: The URL to encode
        max_length: Maximum allowed length of the encoded form, in bytes

    Returns:
        Encoded URL

    Raises:
        URLEncodingError: If the input is not text or is not valid UTF-8 text
        URLTooLongError: If the encoded form is longer than max_length
    """
    if not isinstance(url, str):
        raise URLEncodingError(f"expected str, got {type(url).__name__}")

    try:
        encoded = quote(url, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise URLEncodingError(str(e)) from e

    # Encoded output is pure ASCII, so characters == bytes
    if len(encoded) > max_length:
        raise URLTooLongError(f"encoded URL is {len(encoded)} bytes (max {max_length})")

    return encoded


def build_api_url(base_url: str, encoded_url: str) -> str:
    """Build the shortening API request URL.

    Args:
        base_url: API endpoint (e.g., https://tinyurl.com/api-create.php)
        encoded_url: Already percent-encoded target URL

    Returns:
        Complete request URL
    """
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}url={encoded_url}"


def normalize_short_url(short_url: str) -> str:
    """Prepare a user-supplied short link for requesting.

    Surrounding whitespace is dropped and ``http://`` is assumed when no
    scheme is given.
    """
    url = short_url.strip()
    if url and "://" not in url:
        url = "http://" + url
    return url
