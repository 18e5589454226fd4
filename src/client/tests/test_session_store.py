"""Tests for SessionStore against the in-process gateway."""

import asyncio
import unittest
from dataclasses import replace
from datetime import datetime, timezone

from adapter.fake.auth_gateway import FakeAuthGateway
from client.session import Session, SessionStore
from domain.model.user import AccountType, User


class TestSessionStore(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.gateway = FakeAuthGateway()
        self.store = SessionStore(self.gateway)

    async def test_register_authenticates_but_does_not_onboard(self):
        self.assertTrue(await self.store.register('h@example.com', 'pw123456', 'H'))

        session = self.store.session
        self.assertTrue(session.is_authenticated)
        self.assertFalse(session.is_onboarded)
        self.assertIs(session.user.account_type, AccountType.UNSET)
        self.assertIsNone(session.user.password_hash)
        self.assertFalse(session.is_loading)

    async def test_register_failure_sets_error(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        self.store.logout()

        self.assertFalse(await self.store.register('h@example.com', 'pw123456', 'H'))
        self.assertEqual(self.store.session.last_error, "Email already in use")
        self.assertIsNone(self.store.session.token)

    async def test_login_failure_keeps_logged_out(self):
        self.assertFalse(await self.store.login('nobody@example.com', 'pw123456'))

        self.assertEqual(self.store.session.last_error, "Invalid email or password")
        self.assertFalse(self.store.session.is_authenticated)

    async def test_update_account_type_replaces_user_keeps_token(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        token = self.store.session.token

        user = await self.store.update_account_type(AccountType.BUYER, {'phone': '1', 'address': 'a'})

        self.assertIs(user.account_type, AccountType.BUYER)
        self.assertEqual(self.store.session.token, token)
        self.assertTrue(self.store.session.is_onboarded)

    async def test_update_account_type_requires_login(self):
        self.assertIsNone(await self.store.update_account_type(AccountType.BUYER, {}))
        self.assertEqual(self.gateway.calls, [])

    async def test_logout_clears_session(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        self.store.logout()

        self.assertIsNone(self.store.session.token)
        self.assertIsNone(self.store.session.user)

    async def test_restore_valid_token(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        token = self.store.session.token
        fresh = SessionStore(self.gateway)

        self.assertTrue(await fresh.restore(token))
        self.assertEqual(fresh.session.user.email, 'h@example.com')

    async def test_restore_invalid_token_logs_out(self):
        self.assertFalse(await self.store.restore('garbage'))
        self.assertIsNone(self.store.session.token)
        self.assertIsNone(self.store.session.user)

    async def test_401_on_authenticated_call_ends_session(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        self.gateway.repo.store.clear()

        self.assertIsNone(await self.store.update_account_type(AccountType.BUYER, {'phone': '1', 'address': 'a'}))

        self.assertIsNone(self.store.session.token)
        self.assertIsNotNone(self.store.session.last_error)

    async def test_prebuilt_session_is_used(self):
        session = Session(token='t')
        self.assertIs(SessionStore(self.gateway, session).session, session)


    async def test_storage_outage_keeps_session(self):
        await self.store.register('h@example.com', 'pw123456', 'H')
        token = self.store.session.token
        self.gateway.repo.fail_reads = True

        self.assertIsNone(await self.store.update_profile(name='Hal'))

        self.assertEqual(self.store.session.token, token)
        self.assertTrue(self.store.session.is_authenticated)
        self.assertEqual(self.store.session.last_error, "Storage unavailable")


class _HeldGateway:
    """Holds every profile update until its gate is opened."""

    def __init__(self, user: User):
        self.user = user
        self.gates: list[asyncio.Event] = []

    async def update_profile(self, token: str, **fields) -> User:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return replace(self.user, **fields)


class TestOverlappingCalls(unittest.IsolatedAsyncioTestCase):

    async def test_loading_until_last_call_finishes(self):
        now = datetime.now(timezone.utc)
        user = User(id='u1', name='H', email='h@example.com', created_at=now, updated_at=now)
        gateway = _HeldGateway(user)
        store = SessionStore(gateway, Session(token='t', user=user))

        first = asyncio.create_task(store.update_profile(name='A'))
        second = asyncio.create_task(store.update_profile(name='B'))
        while len(gateway.gates) < 2:
            await asyncio.sleep(0)
        self.assertTrue(store.session.is_loading)

        gateway.gates[0].set()
        await first
        self.assertTrue(store.session.is_loading)

        gateway.gates[1].set()
        await second
        self.assertFalse(store.session.is_loading)
        self.assertEqual(store.session.user.name, 'B')


if __name__ == '__main__':
    unittest.main()
