"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
import requests

from shortlink.config import Config
from shortlink.service import ShortlinkService
from shortlink.common.logging_config import setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SHORTLINK_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("SHORTLINK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def config():
    """Default configuration."""
    return Config(_env_file=None)


@pytest.fixture
def session():
    """Mocked requests session."""
    mock = MagicMock(spec=requests.Session)
    mock.headers = {}
    return mock


@pytest.fixture
def service(config, session, logger):
    """Create service instance over the mocked session."""
    return ShortlinkService(config=config, session=session, logger=logger)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo?tab=readme&lang=en",
        "https://stackoverflow.com/questions/123456#answer-1",
    ]
