"""Tests for product routes: seller role and ownership enforcement."""

import unittest

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_product_repo, get_user_repo
from adapter.fake.product_repository import FakeProductRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.user import AccountType
from services import auth_service
from services.token_service import create_access_token

LISTING = {
    'title': 'Camera',
    'description': 'Mirrorless body',
    'price': 499.0,
    'condition': 'used',
    'location': 'Munich',
    'specifications': [{'key': 'Mount', 'value': 'E'}, {'key': '', 'value': 'ignored'}],
}


class TestProductRoutes(unittest.TestCase):

    def setUp(self):
        self.users = FakeUserRepository()
        self.products = FakeProductRepository()
        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_product_repo] = lambda: self.products
        self.client = TestClient(app)

        self.alice = self._seller('alice@example.com')
        self.bob = self._seller('bob@example.com')

    def tearDown(self):
        app.dependency_overrides.clear()

    def _seller(self, email: str) -> dict:
        user = auth_service.register(self.users, email, 'pw123456', email.split('@')[0])
        self.users.set_account_type(
            user.id, AccountType.SELLER, {'business_name': 'Shop', 'phone': '1', 'address': 'a'},
            (AccountType.UNSET,),
        )
        return {'Authorization': f'Bearer {create_access_token(user.id)}'}

    def _create(self, headers: dict) -> dict:
        response = self.client.post('/api/products', json=LISTING, headers=headers)
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_create_folds_specifications(self):
        product = self._create(self.alice)

        self.assertEqual(product['specifications'], {'Mount': 'E'})
        self.assertEqual(product['category'], 'other')
        self.assertEqual(product['quantity'], 1)

    def test_buyer_cannot_create(self):
        user = auth_service.register(self.users, 'carl@example.com', 'pw123456', 'Carl')
        self.users.set_account_type(user.id, AccountType.BUYER, {'phone': '1', 'address': 'a'}, (AccountType.UNSET,))
        headers = {'Authorization': f'Bearer {create_access_token(user.id)}'}

        response = self.client.post('/api/products', json=LISTING, headers=headers)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['detail'], "Only sellers can create products")

    def test_non_owner_update_is_403_and_product_unchanged(self):
        product = self._create(self.alice)

        response = self.client.put(f"/api/products/{product['id']}", json={'price': 1.0}, headers=self.bob)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.products.get_by_id(product['id']).price, 499.0)

    def test_owner_update(self):
        product = self._create(self.alice)

        response = self.client.put(f"/api/products/{product['id']}", json={'price': 450.0}, headers=self.alice)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['price'], 450.0)
        self.assertEqual(response.json()['title'], 'Camera')

    def test_null_for_required_field_is_rejected_and_product_kept(self):
        product = self._create(self.alice)

        response = self.client.put(
            f"/api/products/{product['id']}", json={'title': None, 'price': None}, headers=self.alice,
        )

        self.assertEqual(response.status_code, 422)
        stored = self.products.get_by_id(product['id'])
        self.assertEqual(stored.title, 'Camera')
        self.assertEqual(stored.price, 499.0)
        self.assertEqual(self.client.get(f"/api/products/{product['id']}", headers=self.alice).status_code, 200)

    def test_optional_descriptor_can_be_cleared(self):
        product = self.client.post('/api/products', json={**LISTING, 'brand': 'Sony'}, headers=self.alice).json()

        response = self.client.put(f"/api/products/{product['id']}", json={'brand': None}, headers=self.alice)

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()['brand'])

    def test_products_embed_their_seller(self):
        product = self._create(self.alice)

        detail = self.client.get(f"/api/products/{product['id']}", headers=self.bob).json()
        listing = self.client.get('/api/products', headers=self.bob).json()

        self.assertEqual(detail['seller']['id'], product['seller_id'])
        self.assertEqual(detail['seller']['name'], 'alice')
        self.assertEqual(detail['seller']['profile']['business_name'], 'Shop')
        self.assertNotIn('email', detail['seller'])
        self.assertEqual(listing[0]['seller'], detail['seller'])

    def test_missing_product_is_404(self):
        self.assertEqual(self.client.get('/api/products/nope', headers=self.alice).status_code, 404)
        self.assertEqual(self.client.delete('/api/products/nope', headers=self.alice).status_code, 404)

    def test_seller_view(self):
        self._create(self.alice)
        self._create(self.bob)

        own = self.client.get('/api/products', params={'view': 'seller'}, headers=self.alice).json()
        everything = self.client.get('/api/products', headers=self.alice).json()

        self.assertEqual(len(own), 1)
        self.assertEqual(len(everything), 2)

    def test_delete_by_non_owner_is_403(self):
        product = self._create(self.alice)

        self.assertEqual(self.client.delete(f"/api/products/{product['id']}", headers=self.bob).status_code, 403)
        self.assertEqual(self.client.delete(f"/api/products/{product['id']}", headers=self.alice).status_code, 200)

    def test_requires_token(self):
        self.assertEqual(self.client.get('/api/products').status_code, 401)


if __name__ == '__main__':
    unittest.main()
