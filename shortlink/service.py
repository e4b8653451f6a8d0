"""Shorten and unshorten operations over a scoped HTTP session."""

import logging
import time
from typing import Optional, Tuple

import requests
from urllib3.exceptions import ReadTimeoutError

from .buffer import ResponseBuffer
from .config import Config
from .models import RequestResult
from .common.url_builder import (
    URLEncodingError,
    URLTooLongError,
    encode_target_url,
    build_api_url,
    normalize_short_url,
)
from .common.validators import is_valid_url, is_success_status


SESSION_ERROR = "Error: Could not initialize HTTP session"
ENCODING_ERROR = "Error: URL encoding failed"
TOO_LONG_ERROR = "Error: URL too long for API"
SHORTEN_TIMEOUT_ERROR = "Error: Could not shorten URL (request timed out)"
SHORTEN_NETWORK_ERROR = "Error: Could not shorten URL (network failure)"
SHORTEN_HTTP_ERROR = "Error: Could not shorten URL (HTTP {status})"
SHORTEN_RESPONSE_ERROR = "Error: Unexpected response from shortening service"
UNSHORTEN_TIMEOUT_ERROR = "Error: Could not unshorten URL (request timed out)"
UNSHORTEN_NETWORK_ERROR = "Error: Could not unshorten URL (network issue)"
REDIRECT_ERROR = "Error: Invalid or failed redirect response"


class ShortlinkService:
    """Client for shortening URLs and resolving short links.

    The service owns one ``requests.Session`` for its lifetime. Use it as a
    context manager so the session is closed when the run ends::

        with ShortlinkService(config) as service:
            print(service.shorten("https://example.com"))

    Every failure is returned as a failed ``RequestResult`` carrying a
    readable message; nothing network related is raised to the caller.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the service.

        Args:
            config: Configuration (loaded from the environment if omitted)
            session: Optional pre-built session, mainly for tests
            logger: Optional logger
        """
        self.config = config or Config()
        self.logger = logger or logging.getLogger(__name__)
        self.session: Optional[requests.Session] = None
        if session is not None:
            self._configure(session)

    def _configure(self, session: requests.Session) -> None:
        session.headers.update({"User-Agent": self.config.user_agent})
        session.max_redirects = self.config.max_redirects
        self.session = session

    def open(self) -> "ShortlinkService":
        """Create the HTTP session if there is none yet."""
        if self.session is None:
            self._configure(requests.Session())
            self.logger.debug("HTTP session opened")
        return self

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session is not None:
            self.session.close()
            self.session = None
            self.logger.debug("HTTP session closed")

    def __enter__(self) -> "ShortlinkService":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _timeouts_until(self, deadline: float) -> Tuple[float, float]:
        """Connect and read timeouts for the next request under an overall deadline.

        Raises:
            requests.exceptions.ReadTimeout: If the deadline has already passed
        """
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise requests.exceptions.ReadTimeout(
                f"no complete response after {self.config.timeout}s"
            )
        return (min(self.config.connect_timeout, remaining), remaining)

    def shorten(self, long_url: str) -> RequestResult:
        """Shorten a URL with the configured API.

        Args:
            long_url: The full URL (e.g., https://example.com)

        Returns:
            RequestResult with the short link, or an error message
        """
        try:
            encoded = encode_target_url(long_url, self.config.max_encoded_length)
        except URLTooLongError as e:
            self.logger.warning(f"Rejected URL before request: {e}")
            return RequestResult.error(TOO_LONG_ERROR)
        except URLEncodingError as e:
            self.logger.warning(f"Could not encode URL: {e}")
            return RequestResult.error(ENCODING_ERROR)

        if self.session is None:
            return RequestResult.error(SESSION_ERROR)

        api_url = build_api_url(self.config.api_base_url, encoded)
        self.logger.debug(f"GET {api_url}")

        try:
            buffer, status_code, encoding = self._fetch(api_url)
        except requests.exceptions.Timeout as e:
            self.logger.warning(f"Shortening request timed out: {e}")
            return RequestResult.error(SHORTEN_TIMEOUT_ERROR)
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Shortening request failed: {e}")
            return RequestResult.error(SHORTEN_NETWORK_ERROR)

        self.logger.debug(f"Shortening API answered {status_code} with {buffer.length} bytes")

        if status_code >= 400:
            return RequestResult.error(SHORTEN_HTTP_ERROR.format(status=status_code))

        short_url = buffer.text(encoding).strip()
        is_valid, error = is_valid_url(short_url)
        if not is_valid:
            self.logger.warning(f"Shortening API returned an unusable body ({error}): {short_url[:200]!r}")
            return RequestResult.error(SHORTEN_RESPONSE_ERROR)

        self.logger.info(f"Shortened {long_url} -> {short_url}")
        return RequestResult.ok(short_url)

    def _fetch(self, url: str) -> Tuple[ResponseBuffer, int, Optional[str]]:
        """GET a URL, streaming the body into a buffer under an overall deadline.

        Returns:
            Tuple of (buffer, status_code, encoding)

        Raises:
            requests.exceptions.RequestException: On transport failure or timeout
        """
        deadline = time.monotonic() + self.config.timeout
        buffer = ResponseBuffer()

        with self.session.get(url, timeout=self._timeouts_until(deadline), stream=True) as response:
            try:
                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    buffer.write(chunk)
                    if time.monotonic() > deadline:
                        raise requests.exceptions.ReadTimeout(
                            f"response not complete after {self.config.timeout}s"
                        )
            except requests.exceptions.ConnectionError as e:
                # iter_content reports a socket read timeout as ConnectionError
                if e.args and isinstance(e.args[0], ReadTimeoutError):
                    raise requests.exceptions.ReadTimeout(str(e.args[0])) from e
                raise
            return buffer, response.status_code, response.encoding

    def unshorten(self, short_url: str) -> RequestResult:
        """Follow redirects from a short link to its destination.

        Args:
            short_url: The shortened URL (e.g., https://tinyurl.com/xyz)

        Returns:
            RequestResult with the final URL, or an error message
        """
        url = normalize_short_url(short_url) if isinstance(short_url, str) else ""
        if not url:
            return RequestResult.error(REDIRECT_ERROR)

        if self.session is None:
            return RequestResult.error(SESSION_ERROR)

        self.logger.debug(f"HEAD {url} (following redirects)")

        try:
            final_url, status_code, hops = self._resolve(url)
        except requests.exceptions.Timeout as e:
            self.logger.warning(f"Unshortening request timed out: {e}")
            return RequestResult.error(UNSHORTEN_TIMEOUT_ERROR)
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Unshortening request failed: {e}")
            return RequestResult.error(UNSHORTEN_NETWORK_ERROR)

        self.logger.debug(f"Resolved after {hops} redirect(s): {status_code} {final_url}")

        if is_success_status(status_code) and final_url:
            return RequestResult.ok(final_url)
        return RequestResult.error(REDIRECT_ERROR)

    def _resolve(self, url: str) -> Tuple[str, int, int]:
        """Send HEAD requests hop by hop until a non-redirect response.

        All hops share one overall deadline.

        Returns:
            Tuple of (effective_url, status_code, redirect_count)

        Raises:
            requests.exceptions.RequestException: On transport failure, timeout
                or too many redirects
        """
        deadline = time.monotonic() + self.config.timeout
        response = self.session.head(
            url, allow_redirects=False, timeout=self._timeouts_until(deadline)
        )
        hops = 0
        try:
            while response.is_redirect and response.next is not None:
                if hops >= self.config.max_redirects:
                    raise requests.exceptions.TooManyRedirects(
                        f"Exceeded {self.config.max_redirects} redirects.", response=response
                    )
                next_request = response.next
                response.close()
                hops += 1
                self.logger.debug(f"Redirect {hops}: {next_request.url}")
                response = self.session.send(
                    next_request,
                    allow_redirects=False,
                    timeout=self._timeouts_until(deadline),
                )
            return response.url, response.status_code, hops
        finally:
            response.close()
