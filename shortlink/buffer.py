"""In-memory accumulation of HTTP response bodies."""

from typing import Optional


class ResponseBuffer:
    """Growable byte buffer filled chunk by chunk as a response arrives.

    ``length`` always equals the number of bytes written so far. A buffer
    belongs to the single request that created it.
    """

    def __init__(self):
        self._data = bytearray()

    def write(self, chunk: bytes) -> int:
        """Append a chunk of body data.

        Args:
            chunk: Bytes delivered by the HTTP client

        Returns:
            Number of bytes accepted
        """
        self._data.extend(chunk)
        return len(chunk)

    @property
    def length(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def getvalue(self) -> bytes:
        """Return a copy of the buffered bytes."""
        return bytes(self._data)

    def text(self, encoding: Optional[str] = None) -> str:
        """Decode the buffered bytes.

        Args:
            encoding: Charset announced by the server, UTF-8 if unknown

        Returns:
            Decoded body, with undecodable bytes replaced
        """
        try:
            return self._data.decode(encoding or "utf-8", errors="replace")
        except LookupError:
            # Unknown charset name from the server
            return self._data.decode("utf-8", errors="replace")
