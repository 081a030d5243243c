from typing import List
from uuid import UUID

from src.catalog.schema import ProductIn, ProductOut
from src.catalog.services import ProductService


class ProductController:
    """HTTP-facing product operations; one method per route."""

    def __init__(self, service: ProductService):
        self.service = service

    def get_all_products(self) -> List[ProductOut]:
        return self.service.get_all_products()

    def create_product(self, data: ProductIn) -> ProductOut:
        return self.service.create_product(data)

    def get_product(self, product_id: UUID) -> ProductOut:
        return self.service.get_product(product_id)

    def update_product(self, product_id: UUID, data: ProductIn) -> ProductOut:
        return self.service.update_product(product_id, data)

    def delete_product(self, product_id: UUID) -> None:
        self.service.delete_product(product_id)
