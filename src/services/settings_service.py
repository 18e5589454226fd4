"""Settings service: profile edits, password change and notification preferences.

Profile writes are upserts: the first settings edit creates the profile.
"""

import logging

from domain.model.errors import DomainError, NotFoundError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository
from services.auth_service import hash_password, validate_password, verify_password

logger = logging.getLogger(__name__)


def update_profile(
    repo: UserRepository,
    user_id: str,
    name: str | None = None,
    phone: str | None = None,
    address: str | None = None,
    profile_image: str | None = None,
) -> User:
    if name is not None and not name.strip():
        raise ValidationError("Name cannot be empty")

    user = repo.upsert_profile(
        user_id,
        {'phone': phone, 'address': address, 'profile_image': profile_image},
        name=name.strip() if name else None,
    )
    if not user:
        raise DomainError("Failed to update profile")

    logger.info("Profile updated", extra={"userId": user_id})
    return user


def change_password(repo: UserRepository, user_id: str, current_password: str, new_password: str) -> None:
    """Replace the password after re-checking the current one.

    Raises:
        NotFoundError: user vanished
        ValidationError: current password wrong, or new password too weak
    """
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    if not user.password_hash or not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    validate_password(new_password)
    if not repo.update_password(user_id, hash_password(new_password)):
        raise DomainError("Failed to change password")

    logger.info("Password changed", extra={"userId": user_id})


def update_notification_preferences(
    repo: UserRepository,
    user_id: str,
    email_notifications: bool | None = None,
    order_updates: bool | None = None,
) -> User:
    user = repo.upsert_profile(
        user_id,
        {'email_notifications': email_notifications, 'order_updates': order_updates},
    )
    if not user:
        raise DomainError("Failed to update notification preferences")
    return user
