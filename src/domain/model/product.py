# domain/model/product.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from domain.model.errors import ForbiddenError

DEFAULT_CATEGORY = 'other'

# Fields a seller may change after listing.
EDITABLE_FIELDS = (
    'title', 'description', 'price', 'category', 'condition', 'location',
    'brand', 'model', 'color', 'quantity', 'features', 'specifications',
    'negotiable', 'shipping', 'warranty', 'warranty_duration', 'images',
)

# Editable fields that may be cleared.
NULLABLE_FIELDS = ('brand', 'model', 'color', 'warranty_duration')


@dataclass
class Product:
    """Domain model representing a product listing owned by one seller."""
    id: str
    seller_id: str
    title: str
    description: str
    price: float
    condition: str
    location: str
    created_at: datetime
    updated_at: datetime
    category: str = DEFAULT_CATEGORY
    brand: str | None = None
    model: str | None = None
    color: str | None = None
    quantity: int = 1
    features: list[str] = field(default_factory=list)
    specifications: dict[str, str] = field(default_factory=dict)
    negotiable: bool = False
    shipping: bool = False
    warranty: bool = False
    warranty_duration: str | None = None
    images: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, seller_id: str, **attrs) -> 'Product':
        """Create a new listing with a fresh id and timestamps."""
        now = datetime.now(timezone.utc)
        attrs = {k: v for k, v in attrs.items() if v is not None}
        attrs.setdefault('category', DEFAULT_CATEGORY)
        return cls(
            id=uuid.uuid4().hex,
            seller_id=seller_id,
            created_at=now,
            updated_at=now,
            **attrs,
        )

    def check_ownership(self, user_id: str) -> None:
        """Verify ownership. Raises ForbiddenError on mismatch."""
        if self.seller_id != user_id:
            raise ForbiddenError("Not authorized to modify this product")
