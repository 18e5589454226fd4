"""Tests for MongoDB index helpers."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import OperationFailure

from adapter.mongodb.indexes import create_index_safe, ensure_all_indexes


class TestCreateIndexSafe(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()

    def test_creates_index(self):
        self.assertTrue(create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True))
        self.collection.create_index.assert_called_once_with([('email', 1)], name='idx_users_email', unique=True)

    def test_replaces_index_with_same_keys_under_other_name(self):
        self.collection.create_index.side_effect = [OperationFailure('conflict', code=85), None]
        self.collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'email_1': {'key': [('email', 1)]},
        }

        self.assertTrue(create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True))
        self.collection.drop_index.assert_called_once_with('email_1')
        self.assertEqual(self.collection.create_index.call_count, 2)

    def test_other_operation_failures_propagate(self):
        self.collection.create_index.side_effect = OperationFailure('unauthorized', code=13)
        with self.assertRaises(OperationFailure):
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')

    def test_unresolvable_conflict(self):
        self.collection.create_index.side_effect = OperationFailure('conflict', code=86)
        self.collection.index_information.return_value = {'_id_': {'key': [('_id', 1)]}}

        self.assertFalse(create_index_safe(self.collection, [('email', 1)], 'idx_users_email'))
        self.collection.drop_index.assert_not_called()


class TestEnsureAllIndexes(unittest.TestCase):

    def test_indexes_every_collection(self):
        collections = {}
        db = MagicMock()
        db.__getitem__.side_effect = lambda name: collections.setdefault(name, MagicMock())

        self.assertTrue(ensure_all_indexes(db))
        self.assertEqual(set(collections), {'users', 'products', 'notifications'})
        unique_calls = [
            c for c in collections['users'].create_index.call_args_list if c.kwargs.get('unique')
        ]
        self.assertEqual(unique_calls[0].args[0], [('email', 1)])


if __name__ == '__main__':
    unittest.main()
