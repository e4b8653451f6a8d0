"""Result type returned by shortlink operations."""

from pydantic import BaseModel, Field


class RequestResult(BaseModel):
    """Outcome of a single shorten or unshorten call."""

    success: bool = Field(..., description="Whether the operation produced a URL")
    payload: str = Field(..., description="Resulting URL, or a human-readable error message")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"success": True, "payload": "https://tinyurl.com/abc123"},
                {"success": False, "payload": "Error: URL too long for API"},
            ]
        },
    }

    @classmethod
    def ok(cls, url: str) -> "RequestResult":
        return cls(success=True, payload=url)

    @classmethod
    def error(cls, message: str) -> "RequestResult":
        return cls(success=False, payload=message)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self.model_dump()
