"""Product listing routes.

Endpoints:
- POST /api/products: List a product (sellers only)
- GET /api/products: Browse products; ?view=seller lists the caller's own
- GET /api/products/{id}: Product details
- PUT /api/products/{id}: Update a product (owner only)
- DELETE /api/products/{id}: Delete a product (owner only)

Product responses carry a summary of their seller (id, name, profile).
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, status

from api.dependencies import get_product_repo, get_user_repo
from api.errors import to_http_exception
from api.models import MessageResponse, ProductCreate, ProductResponse, ProductUpdate
from api.security import get_current_identity
from domain.model.errors import DomainError
from domain.model.product import Product
from domain.model.user import Identity
from port.product_repository import ProductRepository
from port.user_repository import UserRepository
from services import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _with_sellers(user_repo: UserRepository, products: list[Product]) -> list[ProductResponse]:
    sellers = product_service.find_sellers(user_repo, products)
    return [ProductResponse.from_domain(p, sellers.get(p.seller_id)) for p in products]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    identity: Identity = Depends(get_current_identity),
    repo: ProductRepository = Depends(get_product_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    try:
        product = product_service.create_product(repo, identity, request.model_dump())
        return _with_sellers(user_repo, [product])[0]
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    view: Optional[Literal["seller"]] = None,
    identity: Identity = Depends(get_current_identity),
    repo: ProductRepository = Depends(get_product_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    try:
        products = product_service.list_products(repo, identity, seller_view=view == "seller")
        return _with_sellers(user_repo, products)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: ProductRepository = Depends(get_product_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    try:
        product = product_service.get_product(repo, product_id)
        return _with_sellers(user_repo, [product])[0]
    except DomainError as e:
        raise to_http_exception(e)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    identity: Identity = Depends(get_current_identity),
    repo: ProductRepository = Depends(get_product_repo),
    user_repo: UserRepository = Depends(get_user_repo),
):
    """Update a product. 404 if missing, 403 unless the caller is its seller.

    Fields absent from the body are left as they are; `null` is accepted only
    for the optional descriptors (brand, model, color, warranty_duration).
    """
    try:
        product = product_service.update_product(
            repo, identity, product_id, request.model_dump(exclude_unset=True),
        )
        return _with_sellers(user_repo, [product])[0]
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: ProductRepository = Depends(get_product_repo),
):
    try:
        product_service.delete_product(repo, identity, product_id)
    except DomainError as e:
        raise to_http_exception(e)
    return MessageResponse(message="Product deleted successfully")
