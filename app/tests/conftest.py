import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.intl`) works during pytest collection. Pytest
# may import `conftest` before the project root is on sys.path depending on
# invocation; add it explicitly here before importing application modules.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
import structlog

from infrastructure.intl import RequestScope
from infrastructure.services.providers import get_intl, get_settings


@pytest.fixture(autouse=True)
def reset_providers():
    """Clear cached application-scoped providers between tests."""
    get_settings.cache_clear()
    get_intl.cache_clear()
    yield
    get_settings.cache_clear()
    get_intl.cache_clear()


@pytest.fixture(autouse=True)
def clear_log_context():
    """Prevent structlog context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def request_scope():
    """A fresh RequestScope, standing in for one logical request."""
    return RequestScope(correlation_id="test-request")


@pytest.fixture
def app_intl():
    """Intl runtime over the sample messages with a mock reference loader."""
    from tests.factories.intl import make_intl, make_loader, make_ref_loader

    return make_intl(loader=make_loader(), ref_loader=make_ref_loader())


@pytest.fixture
def client(app_intl):
    """TestClient for the application with the intl provider overridden."""
    from fastapi.testclient import TestClient

    from server import server

    server.handler.dependency_overrides[get_intl] = lambda: app_intl
    with TestClient(server.handler) as test_client:
        yield test_client
    server.handler.dependency_overrides.clear()
