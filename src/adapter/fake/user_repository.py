"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import StorageError
from domain.model.profile import Profile
from domain.model.user import AccountType, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Simulates the profile half of an account setup write failing.
        self.fail_profile_write = False
        # Simulates the store being unreachable for lookups.
        self.fail_reads = False

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> User | None:
        if any(u.email == email for u in self.store.values()):
            return None

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            name=name,
            email=email,
            created_at=now,
            updated_at=now,
            account_type=AccountType.UNSET,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return replace(user)

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        now = datetime.now(timezone.utc)
        self.store[user_id] = replace(user, last_login=now, updated_at=now)
        return True

    def set_account_type(
        self,
        user_id: str,
        account_type: AccountType,
        profile: dict,
        allowed_from: tuple[AccountType, ...],
    ) -> User | None:
        user = self.store.get(user_id)
        if not user or user.account_type not in allowed_from:
            return None

        # Build the new record completely, then swap it in.
        updated = replace(
            user,
            account_type=account_type,
            profile=(user.profile or Profile()).merged(profile),
            updated_at=datetime.now(timezone.utc),
        )
        if self.fail_profile_write:
            return None
        self.store[user_id] = updated
        return replace(updated)

    def upsert_profile(self, user_id: str, profile: dict, name: str | None = None) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        updated = replace(
            user,
            name=name or user.name,
            profile=(user.profile or Profile()).merged(profile),
            updated_at=datetime.now(timezone.utc),
        )
        self.store[user_id] = updated
        return replace(updated)

    def update_password(self, user_id: str, password_hash: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False
        self.store[user_id] = replace(
            user, password_hash=password_hash, updated_at=datetime.now(timezone.utc),
        )
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        if self.fail_reads:
            raise StorageError()
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        if self.fail_reads:
            raise StorageError()
        user = self.store.get(user_id)
        return replace(user) if user else None
