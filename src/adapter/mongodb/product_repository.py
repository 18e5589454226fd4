"""MongoDB implementation of ProductRepository."""

from dataclasses import asdict
from datetime import datetime, timezone
from logging import getLogger
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import PRODUCTS_COLLECTION_NAME
from domain.model.product import EDITABLE_FIELDS, Product

logger = getLogger(__name__)


class MongoProductRepository:
    def __init__(self, db: Database):
        self.collection = db[PRODUCTS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('seller_id', 1), ('created_at', -1)], 'idx_products_seller_created')
            create_index_safe(self.collection, [('created_at', -1)], 'idx_products_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create products indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Product:
        data = dict(doc)
        data['id'] = data.pop('_id')
        return Product(**data)

    def save(self, product: Product) -> bool:
        doc = asdict(product)
        doc['_id'] = doc.pop('id')
        try:
            self.collection.replace_one({'_id': doc['_id']}, doc, upsert=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to save product", extra={"productId": product.id, "error": str(e)})
            return False

    def get_by_id(self, product_id: str) -> Product | None:
        try:
            doc = self.collection.find_one({'_id': product_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get product", extra={"productId": product_id, "error": str(e)})
            return None

    def find_many(self, seller_id: str | None = None) -> list[Product]:
        query = {'seller_id': seller_id} if seller_id else {}
        try:
            cursor = self.collection.find(query).sort('created_at', DESCENDING)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list products", extra={"sellerId": seller_id, "error": str(e)})
            return []

    def update(self, product_id: str, changes: dict) -> Product | None:
        updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        updates['updated_at'] = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': product_id},
                {'$set': updates},
                return_document=ReturnDocument.AFTER,
            )
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to update product", extra={"productId": product_id, "error": str(e)})
            return None

    def delete(self, product_id: str) -> bool:
        try:
            return self.collection.delete_one({'_id': product_id}).deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete product", extra={"productId": product_id, "error": str(e)})
            return False
