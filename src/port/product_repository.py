from typing import Protocol

from domain.model.product import Product


class ProductRepository(Protocol):
    """Protocol defining the interface for product listing storage."""
    def save(self, product: Product) -> bool: ...
    def get_by_id(self, product_id: str) -> Product | None: ...
    def find_many(self, seller_id: str | None = None) -> list[Product]:
        """List products newest first, optionally restricted to one seller."""
        ...
    def update(self, product_id: str, changes: dict) -> Product | None: ...
    def delete(self, product_id: str) -> bool: ...
