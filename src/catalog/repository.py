from decimal import Decimal
from typing import List, Optional, Protocol
from uuid import UUID

import structlog

from src.catalog.models import Product

logger = structlog.get_logger()


class ProductRepository(Protocol):
    """
    Persistence contract for products.

    Reads never return soft-deleted records.
    """

    def list_all(self) -> List[Product]:
        ...

    def create(self, name: str, price: float, description: str = "") -> Product:
        ...

    def get(self, product_id: UUID) -> Optional[Product]:
        ...

    def update(self, product_id: UUID, **fields) -> Optional[Product]:
        ...

    def delete(self, product_id: UUID) -> bool:
        ...


PRICE_QUANTUM = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Price as stored by the 2-place column, so responses match the row."""
    # Decimal(19.99) would carry the float's binary expansion
    return Decimal(str(value)).quantize(PRICE_QUANTUM)


class DjangoProductRepository:
    """ORM-backed repository using the soft-delete aware manager."""

    def list_all(self) -> List[Product]:
        return list(Product.objects.all())

    def create(self, name: str, price: float, description: str = "") -> Product:
        return Product.objects.create(
            name=name,
            description=description,
            price=to_decimal(price),
        )

    def get(self, product_id: UUID) -> Optional[Product]:
        try:
            return Product.objects.get(id=product_id)
        except Product.DoesNotExist:  # type: ignore[unresolved-attribute]
            return None

    def update(self, product_id: UUID, **fields) -> Optional[Product]:
        product = self.get(product_id)
        if product is None:
            return None

        if "price" in fields:
            fields["price"] = to_decimal(fields["price"])
        for key, value in fields.items():
            setattr(product, key, value)
        product.save()
        return product

    def delete(self, product_id: UUID) -> bool:
        product = self.get(product_id)
        if product is None:
            return False

        product.soft_delete()
        logger.info("product_soft_deleted", product_id=str(product_id))
        return True
