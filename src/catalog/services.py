from typing import List
from uuid import UUID

import structlog
from opentelemetry import metrics

from src.catalog.errors import ProductNotFound
from src.catalog.repository import ProductRepository
from src.catalog.schema import ProductIn, ProductOut

logger = structlog.get_logger()
meter = metrics.get_meter("product-service")

product_created_counter = meter.create_counter(
    name="products_created_total",
    description="Total number of products created through the API",
    unit="1",
)

cache_hits_counter = meter.create_counter(
    name="product_cache_hits_total",
    description="Number of times product data was found in the cache",
    unit="1",
)

cache_misses_counter = meter.create_counter(
    name="product_cache_misses_total",
    description="Number of times product data had to be fetched from DB",
    unit="1",
)

DEFAULT_CACHE_TIMEOUT = 300


def cache_key(product_id: UUID) -> str:
    return f"product:{product_id}"


class ProductService:
    """
    Orchestrates the product repository and maps entities to ProductOut.

    Single-product reads go through ``cache`` (any Django cache backend);
    writes invalidate the affected entry.
    """

    def __init__(
        self,
        repository: ProductRepository,
        cache,
        cache_timeout: int = DEFAULT_CACHE_TIMEOUT,
    ):
        self.repository = repository
        self.cache = cache
        self.cache_timeout = cache_timeout

    def get_all_products(self) -> List[ProductOut]:
        return [ProductOut.from_orm(p) for p in self.repository.list_all()]

    def create_product(self, data: ProductIn) -> ProductOut:
        product = self.repository.create(**data.dict())
        product_created_counter.add(1, {"service": "product-service"})

        logger.info(
            "product_created",
            product_id=str(product.id),
            product_name=product.name,
        )
        return ProductOut.from_orm(product)

    def get_product(self, product_id: UUID) -> ProductOut:
        key = cache_key(product_id)
        cached_product = self.cache.get(key)

        if cached_product:
            cache_hits_counter.add(1, {"service": "product-service"})
            logger.info("product_cache_hit", product_id=product_id)
            return ProductOut(**cached_product)

        product = self.repository.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)

        cache_misses_counter.add(1, {"service": "product-service"})
        result = ProductOut.from_orm(product)
        self.cache.set(key, result.dict(), timeout=self.cache_timeout)

        logger.info("product_cache_miss", product_id=product_id)
        return result

    def update_product(self, product_id: UUID, data: ProductIn) -> ProductOut:
        product = self.repository.update(product_id, **data.dict())
        if product is None:
            raise ProductNotFound(product_id)

        self.cache.delete(cache_key(product_id))
        logger.info("product_updated", product_id=str(product_id))
        return ProductOut.from_orm(product)

    def delete_product(self, product_id: UUID) -> None:
        if not self.repository.delete(product_id):
            raise ProductNotFound(product_id)

        self.cache.delete(cache_key(product_id))
        logger.info("product_deleted", product_id=str(product_id))
