from unittest import mock

import pytest
from django.core.cache import cache
from django.core.cache.backends.locmem import LocMemCache

from src.catalog.services import ProductService
from tests.fakes import InMemoryProductRepository


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def repository():
    return InMemoryProductRepository()


@pytest.fixture
def service_cache():
    local_cache = LocMemCache("service-tests", {})
    local_cache.clear()
    yield local_cache
    local_cache.clear()


@pytest.fixture
def service(repository, service_cache):
    return ProductService(repository, service_cache, cache_timeout=60)


@pytest.fixture
def mocked_service(monkeypatch):
    """Swap the wired controller's service for a mock."""
    from src.catalog.container import product_controller

    fake = mock.Mock(spec=ProductService)
    monkeypatch.setattr(product_controller, "service", fake)
    return fake
