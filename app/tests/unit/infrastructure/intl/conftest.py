"""Feature-level fixtures for intl runtime tests.

Provides mock collaborators and request-scoped components wired together the
way the Intl facade wires them.
"""

import pytest
import pytest_asyncio

from infrastructure.intl import (
    IntlCacheStore,
    NamespaceLoader,
    PartitionSynchronizer,
)
from tests.factories.intl import (
    make_config,
    make_intl,
    make_loader,
    make_ref_loader,
)


@pytest.fixture
def locale_loader():
    """Locale loader mock over the sample messages."""
    return make_loader()


@pytest.fixture
def ref_loader():
    """Reference loader mock returning a default export."""
    return make_ref_loader()


@pytest.fixture
def config(locale_loader, ref_loader):
    return make_config(loader=locale_loader, ref_loader=ref_loader)


@pytest.fixture
def store(request_scope, config):
    """Initialized cache store for one request."""
    cache_store = IntlCacheStore(request_scope)
    cache_store.initialize(config)
    return cache_store


@pytest.fixture
def namespace_loader(store):
    return NamespaceLoader(store)


@pytest.fixture
def synchronizer(store, namespace_loader):
    return PartitionSynchronizer(store, namespace_loader)


@pytest_asyncio.fixture
async def loaded_synchronizer(synchronizer, namespace_loader):
    """Synchronizer whose store already holds the "en" raw tree."""
    await namespace_loader.ensure_locale_loaded("en")
    return synchronizer


@pytest.fixture
def intl(locale_loader, ref_loader):
    return make_intl(loader=locale_loader, ref_loader=ref_loader)
