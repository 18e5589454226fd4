"""Tests for profile photo upload."""

import unittest

from adapter.fake.auth_gateway import FakeAuthGateway
from adapter.fake.image_host import FakeImageHost
from client.profile import update_profile_photo
from client.session import SessionStore


class TestUpdateProfilePhoto(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.store = SessionStore(FakeAuthGateway())
        await self.store.register('jo@example.com', 'pw123456', 'Jo')

    async def test_uploads_and_saves_url(self):
        host = FakeImageHost()

        user = await update_profile_photo(self.store, host, b'\x89PNG', 'me.png')

        self.assertIn(user.profile.profile_image, host.uploads)
        self.assertEqual(self.store.session.user.profile.profile_image, user.profile.profile_image)

    async def test_upload_failure_surfaces_error(self):
        user = await update_profile_photo(self.store, FakeImageHost(fail=True), b'x', 'me.png')

        self.assertIsNone(user)
        self.assertEqual(self.store.session.last_error, "Failed to upload image")
        self.assertIsNone(self.store.session.user.profile)


if __name__ == '__main__':
    unittest.main()
