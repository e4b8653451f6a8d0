"""Configuration management for shortlink."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator

from . import __version__


class Config(BaseSettings):
    """Application configuration."""

    # Shortening API settings
    api_base_url: str = Field(
        default="https://tinyurl.com/api-create.php",
        description="Endpoint that returns a short link for ?url=<encoded>"
    )

    max_encoded_length: int = Field(
        default=900,
        ge=1,
        description="Maximum length in bytes of the percent-encoded URL"
    )

    # HTTP settings
    connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds allowed to establish a connection"
    )

    timeout: float = Field(
        default=8.0,
        gt=0,
        description="Overall seconds allowed per request"
    )

    max_redirects: int = Field(
        default=30,
        ge=0,
        description="Maximum redirects followed when unshortening"
    )

    user_agent: str = Field(
        default=f"shortlink/{__version__}",
        description="User-Agent header sent on every request"
    )

    chunk_size: int = Field(
        default=1024,
        ge=1,
        description="Bytes read per chunk when streaming a response body"
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stderr only if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_prefix": "SHORTLINK_",
        "env_file": None,  # environment only; a .env file must be passed explicitly
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @model_validator(mode="after")
    def check_timeouts(self) -> "Config":
        """Overall timeout can never be shorter than the connect timeout."""
        if self.timeout < self.connect_timeout:
            raise ValueError("timeout must be greater than or equal to connect_timeout")
        return self


def load_config(**overrides) -> Config:
    """Load configuration from environment.

    Args:
        **overrides: Values that take precedence over the environment

    Returns:
        Validated configuration
    """
    return Config(**overrides)
