"""Tests for the navigation guard."""

import unittest
from datetime import datetime, timezone

from client.route_guard import ACCOUNT_SETUP_PATH, LOGIN_PATH, Allow, RedirectTo, decide
from client.session import Session
from domain.model.user import AccountType, User

PATHS = ('/', '/login', '/dashboard', '/account-setup', '/settings', '/products/new')


def _user(account_type: AccountType) -> User:
    now = datetime.now(timezone.utc)
    return User(id='u1', name='U', email='u@example.com', created_at=now, updated_at=now, account_type=account_type)


class TestDecide(unittest.TestCase):

    def test_no_token_redirects_to_login(self):
        for path in PATHS:
            with self.subTest(path=path):
                self.assertEqual(decide(Session(), path), RedirectTo(LOGIN_PATH))

    def test_token_without_user_counts_as_logged_out(self):
        self.assertEqual(decide(Session(token='t'), '/dashboard'), RedirectTo(LOGIN_PATH))

    def test_unset_user_sent_to_account_setup(self):
        session = Session(token='t', user=_user(AccountType.UNSET))

        self.assertEqual(decide(session, '/dashboard'), RedirectTo(ACCOUNT_SETUP_PATH))
        self.assertEqual(decide(session, ACCOUNT_SETUP_PATH), Allow())

    def test_onboarded_user_allowed_everywhere(self):
        for account_type in (AccountType.BUYER, AccountType.SELLER):
            session = Session(token='t', user=_user(account_type))
            for path in PATHS:
                with self.subTest(account_type=account_type, path=path):
                    self.assertEqual(decide(session, path), Allow())

    def test_total_and_deterministic(self):
        sessions = [
            Session(),
            Session(token='t'),
            Session(token='t', user=_user(AccountType.UNSET)),
            Session(token='t', user=_user(AccountType.SELLER)),
        ]
        for session in sessions:
            for path in PATHS:
                first = decide(session, path)
                self.assertIsInstance(first, (Allow, RedirectTo))
                self.assertEqual(first, decide(session, path))


if __name__ == '__main__':
    unittest.main()
