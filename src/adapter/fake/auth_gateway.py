"""In-process implementation of AuthGateway for testing.

Runs the real auth services against an in-memory repository, so client
tests exercise the same rules the API enforces.
"""

import asyncio
from dataclasses import replace

from adapter.fake.user_repository import FakeUserRepository
from domain.model.user import AccountType, User
from services import auth_service, settings_service
from services.token_service import create_access_token


class FakeAuthGateway:
    def __init__(self, repo: FakeUserRepository | None = None, latency: float = 0):
        self.repo = repo or FakeUserRepository()
        self.latency = latency
        self.calls: list[str] = []

    @staticmethod
    def _snapshot(user: User) -> User:
        return replace(user, password_hash=None)

    async def _pause(self, name: str) -> None:
        self.calls.append(name)
        await asyncio.sleep(self.latency)

    async def register(self, email: str, password: str, name: str) -> tuple[User, str]:
        await self._pause('register')
        user = auth_service.register(self.repo, email, password, name)
        return self._snapshot(user), create_access_token(user.id)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        await self._pause('login')
        user = auth_service.authenticate(self.repo, email, password)
        return self._snapshot(user), create_access_token(user.id)

    async def update_account_type(self, token: str, account_type: AccountType, profile: dict) -> User:
        await self._pause('update_account_type')
        identity = auth_service.authorize(self.repo, token)
        user = auth_service.update_account_type(self.repo, identity.user_id, account_type, profile)
        return self._snapshot(user)

    async def get_me(self, token: str) -> User:
        await self._pause('get_me')
        identity = auth_service.authorize(self.repo, token)
        return self._snapshot(self.repo.get_by_id(identity.user_id))

    async def update_profile(self, token: str, **fields) -> User:
        await self._pause('update_profile')
        identity = auth_service.authorize(self.repo, token)
        return self._snapshot(settings_service.update_profile(self.repo, identity.user_id, **fields))
