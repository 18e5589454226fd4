"""Product service: listing CRUD with seller role and ownership rules."""

import logging

from domain.model.errors import DomainError, ForbiddenError, NotFoundError, ValidationError
from domain.model.product import NULLABLE_FIELDS, Product
from domain.model.user import Identity, User
from port.product_repository import ProductRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def create_product(repo: ProductRepository, identity: Identity, attrs: dict) -> Product:
    """Create a listing owned by the caller. Only sellers may list products."""
    if not identity.is_seller:
        raise ForbiddenError("Only sellers can create products")

    product = Product.create(seller_id=identity.user_id, **attrs)
    if not repo.save(product):
        raise DomainError("Failed to create product")

    logger.info("Product created", extra={"productId": product.id, "sellerId": identity.user_id})
    return product


def list_products(repo: ProductRepository, identity: Identity, seller_view: bool = False) -> list[Product]:
    """List all products, or only the caller's own listings in seller view."""
    if seller_view:
        if not identity.is_seller:
            raise ForbiddenError("Unauthorized")
        return repo.find_many(seller_id=identity.user_id)
    return repo.find_many()


def find_sellers(user_repo: UserRepository, products: list[Product]) -> dict[str, User]:
    """Map each distinct seller_id to its user. Sellers that no longer exist are left out."""
    sellers = {}
    for seller_id in {p.seller_id for p in products}:
        user = user_repo.get_by_id(seller_id)
        if user:
            sellers[seller_id] = user
    return sellers


def get_product(repo: ProductRepository, product_id: str) -> Product:
    product = repo.get_by_id(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def get_owned_product(repo: ProductRepository, product_id: str, user_id: str) -> Product:
    """Load a product and verify the caller is its seller.

    Raises:
        NotFoundError: product does not exist
        ForbiddenError: product belongs to another seller
    """
    product = get_product(repo, product_id)
    product.check_ownership(user_id)
    return product


def update_product(repo: ProductRepository, identity: Identity, product_id: str, changes: dict) -> Product:
    cleared = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_FIELDS)
    if cleared:
        raise ValidationError(f"{cleared[0]} cannot be empty")

    get_owned_product(repo, product_id, identity.user_id)

    updated = repo.update(product_id, changes)
    if not updated:
        raise DomainError("Failed to update product")

    logger.info("Product updated", extra={"productId": product_id, "fields": sorted(changes)})
    return updated


def delete_product(repo: ProductRepository, identity: Identity, product_id: str) -> None:
    get_owned_product(repo, product_id, identity.user_id)

    if not repo.delete(product_id):
        raise DomainError("Failed to delete product")

    logger.info("Product deleted", extra={"productId": product_id})
