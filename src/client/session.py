"""Client-side session store.

Holds the bearer token and the user snapshot it belongs to. The store is
an ordinary object handed to the route guard and the account setup wizard,
so tests can build one around a synthetic session.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import DomainError, UnauthenticatedError
from domain.model.user import AccountType, User
from port.auth_gateway import AuthGateway

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Token + user snapshot. A token without a user is only ever transient."""
    token: str | None = None
    user: User | None = None
    is_loading: bool = False
    last_error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def is_onboarded(self) -> bool:
        return self.is_authenticated and self.user.is_onboarded


class SessionStore:
    """Mutates the session through the identity API.

    Operations never raise domain errors: failures land in
    `session.last_error` as a single user-facing message.
    Calls may overlap; `session.is_loading` stays set until the last one
    in flight has finished.
    """

    def __init__(self, gateway: AuthGateway, session: Session | None = None):
        self.gateway = gateway
        self.session = session or Session()
        self._in_flight = 0

    async def register(self, email: str, password: str, name: str) -> bool:
        result = await self._call(self.gateway.register(email, password, name), "Registration failed")
        if result is None:
            return False
        self.session.user, self.session.token = result
        return True

    async def login(self, email: str, password: str) -> bool:
        result = await self._call(self.gateway.login(email, password), "Login failed")
        if result is None:
            return False
        self.session.user, self.session.token = result
        return True

    async def update_account_type(self, account_type: AccountType, profile: dict) -> User | None:
        """Finalize the role. On success the user snapshot is replaced, the token kept."""
        if not self.session.token:
            self.session.last_error = "Not authenticated"
            return None
        user = await self._call(
            self.gateway.update_account_type(self.session.token, account_type, profile),
            "Account setup failed",
        )
        if user is not None:
            self.refresh_user(user)
        return user

    async def update_profile(self, **fields) -> User | None:
        if not self.session.token:
            self.session.last_error = "Not authenticated"
            return None
        user = await self._call(
            self.gateway.update_profile(self.session.token, **fields),
            "Failed to update profile",
        )
        if user is not None:
            self.refresh_user(user)
        return user

    async def restore(self, token: str) -> bool:
        """Pair a persisted token with a fresh user fetch, or end up logged out."""
        self.session.token = token
        self.session.user = None
        user = await self._call(self.gateway.get_me(token), "Session expired")
        if user is None:
            self.session.token = None
            return False
        self.session.user = user
        return True

    def refresh_user(self, user: User) -> None:
        self.session.user = user

    def logout(self) -> None:
        self.session.token = None
        self.session.user = None
        self.session.last_error = None

    def handle_unauthenticated(self, message: str | None = None) -> None:
        """A call was rejected with 401: the session has ended."""
        logger.info("Session ended by server")
        self.logout()
        self.session.last_error = message or "Your session has expired. Please log in again."

    async def _call(self, request, fallback: str):
        self._in_flight += 1
        self.session.is_loading = True
        self.session.last_error = None
        try:
            return await request
        except UnauthenticatedError as e:
            if self.session.token:
                self.handle_unauthenticated(str(e) or None)
            else:
                self.session.last_error = str(e) or fallback
            return None
        except DomainError as e:
            self.session.last_error = str(e) or fallback
            return None
        finally:
            self._in_flight -= 1
            self.session.is_loading = self._in_flight > 0
