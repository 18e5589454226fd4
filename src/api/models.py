"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.model.notification import Notification
from domain.model.product import EDITABLE_FIELDS, NULLABLE_FIELDS, Product
from domain.model.user import User


AccountTypeValue = Literal["unset", "buyer", "seller"]


# ── Users ────────────────────────────────────────────────


class ProfileResponse(BaseModel):
    """Profile attached to a user."""
    phone: Optional[str] = None
    address: Optional[str] = None
    business_name: Optional[str] = None
    business_description: Optional[str] = None
    preferences: Optional[str] = None
    profile_image: Optional[str] = Field(None, description="URL on the image host")
    email_notifications: bool = True
    order_updates: bool = True


class UserResponse(BaseModel):
    """User as returned to clients. Never carries the password hash."""
    id: str = Field(..., description="User ID")
    email: str
    name: str
    account_type: AccountTypeValue = Field(..., description="unset until account setup completes")
    profile: Optional[ProfileResponse] = None
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


def to_user_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse."""
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        account_type=user.account_type.value,
        profile=ProfileResponse(**user.profile.to_dict()) if user.profile else None,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_login=user.last_login,
    )


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str
    name: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response model for register and login."""
    token: str
    user: UserResponse


class UserEnvelope(BaseModel):
    user: UserResponse


class SetupProfile(BaseModel):
    """Role-specific profile fields collected by the account setup wizard."""
    phone: Optional[str] = None
    address: Optional[str] = None
    business_name: Optional[str] = None
    business_description: Optional[str] = None
    preferences: Optional[str] = None


class AccountTypeRequest(BaseModel):
    """Request model for finalizing the account type."""
    # Plain str so unknown roles reach the service and get a 400, not a 422.
    account_type: str
    profile: SetupProfile = Field(default_factory=SetupProfile)


# ── Settings ─────────────────────────────────────────────


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_image: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str


class NotificationPreferencesRequest(BaseModel):
    email_notifications: Optional[bool] = None
    order_updates: Optional[bool] = None


class MessageResponse(BaseModel):
    message: str


# ── Products ─────────────────────────────────────────────


REQUIRED_PRODUCT_FIELDS = tuple(f for f in EDITABLE_FIELDS if f not in NULLABLE_FIELDS)


def _fold_specifications(v):
    """Accept [{key, value}, ...] pairs as sent by the listing form."""
    if isinstance(v, list):
        return {
            item['key']: item['value']
            for item in v
            if isinstance(item, dict) and item.get('key') and item.get('value')
        }
    return v


class ProductCreate(BaseModel):
    """Request model for listing a product."""
    title: str = Field(..., min_length=1)
    description: str
    price: float = Field(..., ge=0)
    category: Optional[str] = None
    condition: str
    location: str
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    quantity: int = Field(1, ge=0)
    features: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    negotiable: bool = False
    shipping: bool = False
    warranty: bool = False
    warranty_duration: Optional[str] = None
    images: list[str] = Field(default_factory=list)

    @field_validator('specifications', mode='before')
    @classmethod
    def fold_specifications(cls, v):
        return _fold_specifications(v)


class ProductUpdate(BaseModel):
    """Partial product update. Only fields present in the body are changed."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    condition: Optional[str] = None
    location: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    features: Optional[list[str]] = None
    specifications: Optional[dict[str, str]] = None
    negotiable: Optional[bool] = None
    shipping: Optional[bool] = None
    warranty: Optional[bool] = None
    warranty_duration: Optional[str] = None
    images: Optional[list[str]] = None

    @field_validator('specifications', mode='before')
    @classmethod
    def fold_specifications(cls, v):
        return _fold_specifications(v)

    @field_validator(*REQUIRED_PRODUCT_FIELDS, mode='before')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class SellerResponse(BaseModel):
    """Public view of the seller attached to a listing."""
    id: str
    name: str
    profile: Optional[ProfileResponse] = None

    @classmethod
    def from_user(cls, user: User) -> 'SellerResponse':
        return cls(
            id=user.id,
            name=user.name,
            profile=ProfileResponse(**user.profile.to_dict()) if user.profile else None,
        )


class ProductResponse(BaseModel):
    id: str
    seller_id: str
    seller: Optional[SellerResponse] = None
    title: str
    description: str
    price: float
    category: str
    condition: str
    location: str
    brand: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    quantity: int
    features: list[str]
    specifications: dict[str, str]
    negotiable: bool
    shipping: bool
    warranty: bool
    warranty_duration: Optional[str] = None
    images: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, product: Product, seller: User | None = None) -> 'ProductResponse':
        return cls(**vars(product), seller=SellerResponse.from_user(seller) if seller else None)


# ── Notifications ────────────────────────────────────────


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: str
    read: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, notification: Notification) -> 'NotificationResponse':
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type.value,
            read=notification.read,
            created_at=notification.created_at,
        )
