"""Navigation guard for protected pages.

`decide` is a pure function of the session and the requested path. It is
evaluated on every navigation and never cached.
"""

from dataclasses import dataclass

from client.session import Session
from domain.model.user import AccountType

LOGIN_PATH = "/login"
ACCOUNT_SETUP_PATH = "/account-setup"


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class RedirectTo:
    path: str


Decision = Allow | RedirectTo


def decide(session: Session, requested_path: str) -> Decision:
    # A token that has not been paired with a user yet counts as logged out.
    if not session.is_authenticated:
        return RedirectTo(LOGIN_PATH)
    if session.user.account_type is AccountType.UNSET and requested_path != ACCOUNT_SETUP_PATH:
        return RedirectTo(ACCOUNT_SETUP_PATH)
    return Allow()
