"""Fixtures for server module unit tests."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI

from infrastructure.configuration import IntlSettings, Settings


@pytest.fixture
def mock_fastapi_app():
    """Create a mock FastAPI application."""
    app = MagicMock(spec=FastAPI)
    app.state = MagicMock()
    return app


@pytest.fixture
def settings():
    """Real settings with a fixed intl section."""
    return Settings(PREFIX="test-", intl=IntlSettings(INTL_LOCALES="en,fr"))
