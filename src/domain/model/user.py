from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from domain.model.profile import Profile


class AccountType(str, Enum):
    """Role of a user in the marketplace."""
    UNSET = 'unset'
    BUYER = 'buyer'
    SELLER = 'seller'

    @property
    def is_finalized(self) -> bool:
        return self is not AccountType.UNSET


# Roles a user can choose during account setup.
SELECTABLE_ACCOUNT_TYPES = (AccountType.BUYER, AccountType.SELLER)


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    account_type: AccountType = AccountType.UNSET
    profile: Profile | None = None
    last_login: datetime | None = None
    password_hash: str | None = None

    @property
    def is_onboarded(self) -> bool:
        return self.account_type.is_finalized


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as proven by a bearer token."""
    user_id: str
    account_type: AccountType

    @property
    def is_seller(self) -> bool:
        return self.account_type is AccountType.SELLER


def normalize_email(email: str) -> str:
    return email.strip().lower()
