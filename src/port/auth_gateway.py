"""Port definition for the client's view of the identity API."""

from typing import Protocol

from domain.model.user import AccountType, User


class AuthGateway(Protocol):
    """Remote identity operations as seen from the client.

    Failures are raised as domain errors (InvalidCredentialsError,
    UnauthenticatedError, ValidationError, ...).
    """
    async def register(self, email: str, password: str, name: str) -> tuple[User, str]: ...
    async def login(self, email: str, password: str) -> tuple[User, str]: ...
    async def update_account_type(
        self, token: str, account_type: AccountType, profile: dict,
    ) -> User: ...
    async def get_me(self, token: str) -> User: ...
    async def update_profile(self, token: str, **fields) -> User: ...
