import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
import uuid6
from django.db import connections

from src.catalog.models import Product
from src.catalog.repository import DjangoProductRepository

pytestmark = pytest.mark.django_db


@pytest.fixture
def repo():
    return DjangoProductRepository()


def test_create_stores_exact_decimal(repo):
    product = repo.create(name="Lamp", price=19.99)

    product.refresh_from_db()
    assert product.price == Decimal("19.99")
    assert product.description == ""
    assert product.id.version == 7


def test_list_all_in_creation_order(repo):
    names = ["a", "b", "c"]
    for name in names:
        repo.create(name=name, price=1)

    assert [p.name for p in repo.list_all()] == names


def test_get_missing_returns_none(repo):
    assert repo.get(uuid6.uuid7()) is None


def test_update_changes_fields(repo):
    product = repo.create(name="Lamp", price=10)

    updated = repo.update(product.id, name="Desk lamp", price=12.5)

    assert updated.name == "Desk lamp"
    assert Product.objects.get(id=product.id).price == Decimal("12.50")


def test_update_missing_returns_none(repo):
    assert repo.update(uuid6.uuid7(), name="x") is None


def test_delete_is_soft(repo):
    product = repo.create(name="Lamp", price=10)

    assert repo.delete(product.id) is True

    assert repo.get(product.id) is None
    assert repo.list_all() == []
    assert Product.all_objects.get(id=product.id).is_deleted is True


def test_delete_missing_returns_false(repo):
    assert repo.delete(uuid6.uuid7()) is False


def test_create_rounds_price_to_column_places(repo):
    product = repo.create(name="Lamp", price=19.999)
    returned = product.price

    product.refresh_from_db()
    assert returned == product.price == Decimal("20.00")


@pytest.fixture
def shared_connection():
    # in-memory SQLite lives on one connection; let worker threads use it
    conn = connections["default"]
    conn.inc_thread_sharing()
    yield conn
    conn.dec_thread_sharing()


def test_concurrent_creates_get_distinct_ids(repo, shared_connection):
    workers = 8
    barrier = threading.Barrier(workers, timeout=10)

    def create(i):
        connections["default"] = shared_connection
        barrier.wait()
        return repo.create(name=f"item-{i}", price=i)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        products = list(pool.map(create, range(workers)))

    assert len({p.id for p in products}) == workers
    assert Product.objects.count() == workers
