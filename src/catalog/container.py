"""
Process-wide wiring: repository -> service -> controller.

Built once at import time; ``src.core.urls`` mounts the resulting router.
"""

from django.conf import settings
from django.core.cache import cache

from src.catalog.controller import ProductController
from src.catalog.repository import DjangoProductRepository
from src.catalog.services import ProductService

product_repository = DjangoProductRepository()
product_service = ProductService(
    product_repository,
    cache,
    cache_timeout=settings.PRODUCT_CACHE_TIMEOUT,
)
product_controller = ProductController(product_service)
