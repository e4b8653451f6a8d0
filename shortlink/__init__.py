"""Shorten URLs through TinyURL and resolve short links to their destination."""

__version__ = "0.1.0"

from .buffer import ResponseBuffer
from .models import RequestResult
from .service import ShortlinkService

__all__ = ["ResponseBuffer", "RequestResult", "ShortlinkService", "__version__"]
