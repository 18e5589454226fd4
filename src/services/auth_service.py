"""Auth service: registration, authentication and account setup logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
import os
import re
from functools import lru_cache

import bcrypt

from domain.model.account_setup import (
    build_setup_profile,
    first_error,
    parse_account_type,
    validate_setup_profile,
)
from domain.model.errors import (
    AccountTypeLockedError,
    DomainError,
    DuplicateEmailError,
    InvalidAccountTypeError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    TransactionError,
    ValidationError,
)
from domain.model.product import Product
from domain.model.user import AccountType, Identity, User, normalize_email
from port.product_repository import ProductRepository
from port.user_repository import UserRepository
from services import product_service
from services.token_service import decode_access_token

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
MIN_PASSWORD_LENGTH = 8

# Whether a user who already chose buyer/seller may switch to the other role.
ALLOW_ACCOUNT_TYPE_CHANGE = os.getenv("ALLOW_ACCOUNT_TYPE_CHANGE", "false").lower() in ("1", "true", "yes")


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Checked against when the email is unknown so both failure paths cost a bcrypt round.
    return hash_password("not-a-real-password")


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Za-z]", password):
        raise ValidationError("Password must contain at least one letter")
    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain at least one number")


def register(repo: UserRepository, email: str, password: str, name: str) -> User:
    """Register a new user with account type unset.

    Returns the created User domain object.

    Raises:
        DuplicateEmailError: email already registered (case-insensitive)
        ValidationError: blank name or weak password
    """
    email = normalize_email(email)
    if not name or not name.strip():
        raise ValidationError("Name is required")
    if repo.get_by_email(email):
        raise DuplicateEmailError()

    validate_password(password)
    user = repo.create(email=email, password_hash=hash_password(password), name=name.strip())
    if not user:
        # Lost a race against a concurrent registration, or a storage failure.
        if repo.get_by_email(email):
            raise DuplicateEmailError()
        raise DomainError("Error creating user")

    logger.info("User registered", extra={"userId": user.id})
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Doesn't reveal whether the email exists.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = repo.get_by_email(normalize_email(email))
    if not user or not user.password_hash:
        verify_password(password, _dummy_hash())
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    repo.update_last_login(user.id)
    logger.info("User logged in", extra={"userId": user.id})
    return repo.get_by_id(user.id) or user


def authorize(repo: UserRepository, token: str) -> Identity:
    """Resolve a bearer token to the caller's identity.

    Raises:
        ExpiredTokenError: token expired
        InvalidTokenError: token invalid or its user no longer exists
    """
    user_id = decode_access_token(token)
    user = repo.get_by_id(user_id)
    if not user:
        raise InvalidTokenError("User not found")
    return Identity(user_id=user.id, account_type=user.account_type)


def authorize_product_owner(
    user_repo: UserRepository,
    product_repo: ProductRepository,
    token: str,
    product_id: str,
) -> Product:
    """Authorize the token, then require that its user owns the product."""
    identity = authorize(user_repo, token)
    return product_service.get_owned_product(product_repo, product_id, identity.user_id)


def update_account_type(
    repo: UserRepository,
    user_id: str,
    account_type: str,
    profile: dict | None,
    allow_change: bool | None = None,
) -> User:
    """Finalize the user's role and upsert their profile in one atomic write.

    Raises:
        InvalidAccountTypeError: account_type is not buyer or seller
        ValidationError: a required profile field is blank
        AccountTypeLockedError: role already chosen and switching is disabled
        TransactionError: the atomic write failed; nothing was persisted
    """
    if allow_change is None:
        allow_change = ALLOW_ACCOUNT_TYPE_CHANGE

    requested = parse_account_type(account_type)
    if requested is None:
        raise InvalidAccountTypeError()

    profile = profile or {}
    errors = validate_setup_profile(requested, profile)
    if errors:
        raise ValidationError(first_error(errors), field_errors=errors)

    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.is_onboarded and user.account_type is not requested and not allow_change:
        raise AccountTypeLockedError()

    if allow_change:
        allowed_from = tuple(AccountType)
    else:
        allowed_from = (AccountType.UNSET, requested)

    updated = repo.set_account_type(
        user_id, requested, build_setup_profile(requested, profile), allowed_from,
    )
    if not updated:
        logger.error("Account setup write failed", extra={"userId": user_id})
        raise TransactionError()

    logger.info("Account type set", extra={"userId": user_id, "accountType": requested.value})
    return updated
