"""ShopNet REST API adapter: implements AuthGateway over HTTP for the client.

Maps HTTP status codes back onto domain errors so the session store handles
remote and in-process failures the same way.
"""

import logging
import os
from datetime import datetime
from typing import Any

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import (
    AccountTypeLockedError,
    DomainError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from domain.model.profile import Profile
from domain.model.user import AccountType, User

logger = logging.getLogger(__name__)

SHOPNET_API_URL = os.getenv("SHOPNET_API_URL", "http://localhost:8000")
API_TIMEOUT_SECONDS = 10.0

_ERROR_BY_STATUS: dict[int, type[DomainError]] = {
    400: ValidationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: AccountTypeLockedError,
    422: ValidationError,
}


def _to_user(data: dict[str, Any]) -> User:
    """Convert a UserResponse payload to a User snapshot."""
    last_login = data.get('last_login')
    return User(
        id=data['id'],
        name=data['name'],
        email=data['email'],
        created_at=datetime.fromisoformat(data['created_at']),
        updated_at=datetime.fromisoformat(data['updated_at']),
        account_type=AccountType(data.get('account_type', AccountType.UNSET.value)),
        profile=Profile.from_dict(data.get('profile')),
        last_login=datetime.fromisoformat(last_login) if last_login else None,
    )


def _error_for(response: httpx.Response, unauthorized: type[DomainError]) -> DomainError:
    try:
        detail = response.json().get('detail')
    except ValueError:
        detail = None
    # FastAPI request validation errors carry a list of problems
    message = detail if isinstance(detail, str) else "Request failed"

    if response.status_code == 401:
        return unauthorized(message)
    error_type = _ERROR_BY_STATUS.get(response.status_code, DomainError)
    return error_type(message)


class HttpAuthGateway:
    """AuthGateway backed by the ShopNet API."""

    def __init__(self, base_url: str | None = None, timeout: float = API_TIMEOUT_SECONDS):
        self.base_url = (base_url or SHOPNET_API_URL).rstrip('/')
        self.timeout = timeout

    async def register(self, email: str, password: str, name: str) -> tuple[User, str]:
        data = await self._request(
            'POST', '/api/users/register',
            json={'email': email, 'password': password, 'name': name},
        )
        return _to_user(data['user']), data['token']

    async def login(self, email: str, password: str) -> tuple[User, str]:
        data = await self._request(
            'POST', '/api/users/login',
            json={'email': email, 'password': password},
            unauthorized=InvalidCredentialsError,
        )
        return _to_user(data['user']), data['token']

    async def update_account_type(self, token: str, account_type: AccountType, profile: dict) -> User:
        data = await self._request(
            'PUT', '/api/users/account-type', token=token,
            json={'account_type': AccountType(account_type).value, 'profile': profile},
        )
        return _to_user(data['user'])

    async def get_me(self, token: str) -> User:
        return _to_user(await self._request('GET', '/api/users/me', token=token))

    async def update_profile(self, token: str, **fields) -> User:
        data = await self._request('PUT', '/api/settings/profile', token=token, json=fields)
        return _to_user(data['user'])

    async def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json: dict | None = None,
        unauthorized: type[DomainError] = UnauthenticatedError,
    ) -> dict:
        headers = {'Authorization': f'Bearer {token}'} if token else {}
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
                response = await _send_with_retry(client, method, path, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.warning(
                "ShopNet API request error",
                extra={"method": method, "path": path, "error_type": type(e).__name__},
            )
            raise DomainError("Unable to reach the server. Please try again.")

        if response.status_code >= 400:
            logger.debug(
                "ShopNet API error response",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise _error_for(response, unauthorized)
        return response.json()


# ── HTTP helpers ─────────────────────────────────────────────


# Only connection failures are retried: the request never reached the server.
@retry(
    retry=retry_if_exception_type(httpx.ConnectError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
    reraise=True,
)
async def _send_with_retry(client: httpx.AsyncClient, method: str, path: str, **kwargs) -> httpx.Response:
    return await client.request(method, path, **kwargs)
