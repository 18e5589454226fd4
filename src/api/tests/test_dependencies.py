"""Unit tests for API dependencies and error mapping."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from adapter.mongodb.notification_repository import MongoNotificationRepository
from adapter.mongodb.product_repository import MongoProductRepository
from adapter.mongodb.user_repository import MongoUserRepository
from api.dependencies import get_notification_repo, get_product_repo, get_user_repo
from api.errors import to_http_exception
from domain.model.errors import (
    AccountTypeLockedError,
    DomainError,
    DuplicateEmailError,
    ExpiredTokenError,
    ForbiddenError,
    InvalidAccountTypeError,
    InvalidCredentialsError,
    NotFoundError,
    TransactionError,
)


class TestRepositoryDependencies(unittest.TestCase):

    @patch('api.dependencies.get_database')
    def test_returns_mongo_repositories_when_connected(self, mock_get_database):
        db = MagicMock()
        mock_get_database.return_value = db

        self.assertIsInstance(get_user_repo(), MongoUserRepository)
        self.assertIsInstance(get_product_repo(), MongoProductRepository)
        self.assertIsInstance(get_notification_repo(), MongoNotificationRepository)
        db.__getitem__.assert_any_call('users')

    @patch('api.dependencies.get_database')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_database):
        mock_get_database.return_value = None

        for dependency in (get_user_repo, get_product_repo, get_notification_repo):
            with self.subTest(dependency=dependency.__name__):
                with self.assertRaises(HTTPException) as context:
                    dependency()
                self.assertEqual(context.exception.status_code, 503)
                self.assertEqual(context.exception.detail, "Database unavailable")


class TestToHttpException(unittest.TestCase):

    def test_status_codes(self):
        cases = [
            (InvalidAccountTypeError(), 400),
            (DuplicateEmailError(), 400),
            (InvalidCredentialsError(), 401),
            (ExpiredTokenError(), 401),
            (ForbiddenError("nope"), 403),
            (NotFoundError("missing"), 404),
            (AccountTypeLockedError(), 409),
            (TransactionError(), 500),
            (DomainError("boom"), 500),
        ]
        for error, expected in cases:
            with self.subTest(error=type(error).__name__):
                self.assertEqual(to_http_exception(error).status_code, expected)

    def test_unauthenticated_carries_bearer_challenge(self):
        self.assertEqual(to_http_exception(ExpiredTokenError()).headers, {"WWW-Authenticate": "Bearer"})
        self.assertIsNone(to_http_exception(ForbiddenError("x")).headers)


if __name__ == '__main__':
    unittest.main()
