"""Tests for settings and notification routes."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_notification_repo, get_user_repo
from adapter.fake.notification_repository import FakeNotificationRepository
from adapter.fake.user_repository import FakeUserRepository
from services import auth_service, notification_service
from services.token_service import create_access_token


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.notifications = FakeNotificationRepository()
        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_notification_repo] = lambda: self.notifications
        self.client = TestClient(app)

        self.user = auth_service.register(self.users, 'gina@example.com', 'pw123456', 'Gina')
        self.headers = {'Authorization': f'Bearer {create_access_token(self.user.id)}'}

    def tearDown(self):
        app.dependency_overrides.clear()


class TestSettingsRoutes(RouteTestCase):

    def test_update_profile(self):
        response = self.client.put(
            '/api/settings/profile',
            json={'name': 'Gina M', 'phone': '555', 'profile_image': 'https://img.example/1.png'},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        user = response.json()['user']
        self.assertEqual(user['name'], 'Gina M')
        self.assertEqual(user['profile']['profile_image'], 'https://img.example/1.png')
        self.assertEqual(user['account_type'], 'unset')

    def test_change_password_wrong_current(self):
        response = self.client.put(
            '/api/settings/password',
            json={'current_password': 'nope1234', 'new_password': 'newpass99'},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], "Current password is incorrect")

    def test_change_password(self):
        response = self.client.put(
            '/api/settings/password',
            json={'current_password': 'pw123456', 'new_password': 'newpass99'},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)

        login = self.client.post('/api/users/login', json={'email': 'gina@example.com', 'password': 'newpass99'})
        self.assertEqual(login.status_code, 200)

    def test_notification_preferences(self):
        response = self.client.put(
            '/api/settings/notifications', json={'email_notifications': False}, headers=self.headers,
        )
        self.assertFalse(response.json()['user']['profile']['email_notifications'])
        self.assertTrue(response.json()['user']['profile']['order_updates'])


class TestNotificationRoutes(RouteTestCase):

    def setUp(self):
        super().setUp()
        self.note = notification_service.notify(self.notifications, self.user.id, 'Hello', 'World')
        self.foreign = notification_service.notify(self.notifications, 'someone-else', 'Hi', 'There')

    def test_list_only_own(self):
        response = self.client.get('/api/notifications', headers=self.headers)

        self.assertEqual([n['id'] for n in response.json()], [self.note.id])
        self.assertEqual(response.json()[0]['type'], 'SYSTEM')

    def test_mark_read(self):
        response = self.client.put(f'/api/notifications/{self.note.id}/read', headers=self.headers)
        self.assertTrue(response.json()['read'])

        foreign = self.client.put(f'/api/notifications/{self.foreign.id}/read', headers=self.headers)
        self.assertEqual(foreign.status_code, 404)

    def test_mark_all_read_is_not_treated_as_id(self):
        response = self.client.put('/api/notifications/mark-all-read', headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.notifications.get_for_user(self.note.id, self.user.id).read)
        self.assertFalse(self.notifications.get_for_user(self.foreign.id, 'someone-else').read)

    def test_delete(self):
        self.assertEqual(
            self.client.delete(f'/api/notifications/{self.foreign.id}', headers=self.headers).status_code, 404,
        )
        self.assertEqual(
            self.client.delete(f'/api/notifications/{self.note.id}', headers=self.headers).status_code, 200,
        )


if __name__ == '__main__':
    unittest.main()
