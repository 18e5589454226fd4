"""In-memory implementation of ProductRepository for testing."""

from dataclasses import replace
from datetime import datetime, timezone

from domain.model.product import EDITABLE_FIELDS, Product


class FakeProductRepository:
    def __init__(self):
        self.store: dict[str, Product] = {}

    def save(self, product: Product) -> bool:
        self.store[product.id] = replace(product)
        return True

    def get_by_id(self, product_id: str) -> Product | None:
        product = self.store.get(product_id)
        return replace(product) if product else None

    def find_many(self, seller_id: str | None = None) -> list[Product]:
        products = [
            replace(p) for p in self.store.values()
            if seller_id is None or p.seller_id == seller_id
        ]
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def update(self, product_id: str, changes: dict) -> Product | None:
        product = self.store.get(product_id)
        if not product:
            return None
        allowed = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        updated = replace(product, updated_at=datetime.now(timezone.utc), **allowed)
        self.store[product_id] = updated
        return replace(updated)

    def delete(self, product_id: str) -> bool:
        return self.store.pop(product_id, None) is not None
