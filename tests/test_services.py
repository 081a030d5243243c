from concurrent.futures import ThreadPoolExecutor

import pytest
import uuid6

from src.catalog.errors import ProductNotFound
from src.catalog.schema import ProductIn, ProductOut
from src.catalog.services import cache_key


def make_request(name="Keyboard", price=49.5, description=""):
    return ProductIn(name=name, price=price, description=description)


def test_get_all_products_empty(service):
    assert service.get_all_products() == []


def test_create_product_assigns_id_and_lists_it(service):
    created = service.create_product(make_request())

    assert isinstance(created, ProductOut)
    assert created.name == "Keyboard"
    assert created.price == 49.5

    listed = service.get_all_products()
    assert [p.id for p in listed] == [created.id]


def test_get_all_products_returns_every_product(service):
    for i in range(4):
        service.create_product(make_request(name=f"item-{i}"))

    assert len(service.get_all_products()) == 4


def test_get_product_is_cached(service, repository, service_cache):
    created = service.create_product(make_request())

    first = service.get_product(created.id)
    assert service_cache.get(cache_key(created.id)) == first.dict()

    # edits behind the service's back are not visible until invalidation
    repository.products[created.id].name = "Changed"
    assert service.get_product(created.id).name == "Keyboard"


def test_get_missing_product_raises(service):
    missing = uuid6.uuid7()

    with pytest.raises(ProductNotFound) as excinfo:
        service.get_product(missing)

    assert excinfo.value.product_id == missing


def test_update_product_invalidates_cache(service, service_cache):
    created = service.create_product(make_request())
    service.get_product(created.id)

    updated = service.update_product(
        created.id, make_request(name="Mouse", price=12.25, description="wireless")
    )

    assert updated.name == "Mouse"
    assert updated.description == "wireless"
    assert service_cache.get(cache_key(created.id)) is None
    assert service.get_product(created.id).price == 12.25


def test_update_missing_product_raises(service):
    with pytest.raises(ProductNotFound):
        service.update_product(uuid6.uuid7(), make_request())


def test_delete_product_hides_it(service, service_cache):
    created = service.create_product(make_request())
    service.get_product(created.id)

    service.delete_product(created.id)

    assert service_cache.get(cache_key(created.id)) is None
    assert service.get_all_products() == []
    with pytest.raises(ProductNotFound):
        service.get_product(created.id)


def test_delete_missing_product_raises(service):
    with pytest.raises(ProductNotFound):
        service.delete_product(uuid6.uuid7())


def test_concurrent_creates_get_distinct_ids(service):
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(
            pool.map(
                lambda i: service.create_product(make_request(name=f"item-{i}")),
                range(50),
            )
        )

    ids = {r.id for r in results}
    assert len(ids) == 50
    assert len(service.get_all_products()) == 50
