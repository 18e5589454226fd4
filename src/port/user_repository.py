from typing import Protocol

from domain.model.user import AccountType, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, email: str, password_hash: str, name: str) -> User | None:
        """Create a new user with account type unset. Return None if creation failed."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (normalized) email. Return User or None if not found.

        Raises StorageError if the store cannot be read.
        """
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found.

        Raises StorageError if the store cannot be read.
        """
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def set_account_type(
        self,
        user_id: str,
        account_type: AccountType,
        profile: dict,
        allowed_from: tuple[AccountType, ...],
    ) -> User | None:
        """Atomically upsert the profile and write the account type.

        Applies only while the stored account type is one of `allowed_from`.
        Return the updated User, or None if nothing was written.
        """
        ...

    def upsert_profile(self, user_id: str, profile: dict, name: str | None = None) -> User | None:
        """Create or merge the user's profile (and optionally rename). Return updated User."""
        ...

    def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if successful."""
        ...
