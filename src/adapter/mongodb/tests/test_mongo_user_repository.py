"""Tests for MongoUserRepository against a mocked collection."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from pymongo.errors import OperationFailure, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.indexes import create_index_safe
from adapter.mongodb.user_repository import NATURAL_ORDER, MongoUserRepository
from domain.model.errors import RepositoryError
from domain.model.user import Role, UserData

NOW = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)


def _doc(**overrides) -> dict:
    doc = {
        '_id': 'user-1',
        'first_name': 'Ada',
        'last_name': 'Lovelace',
        'email': 'ada@example.com',
        'password_hash': '$2b$12$hash',
        'role': 'ADMIN',
        'created_at': NOW,
        'updated_at': NOW,
    }
    doc.update(overrides)
    return doc


class MongoRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(self.db)


class TestReads(MongoRepositoryTestCase):

    def test_uses_users_collection(self):
        self.db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    def test_get_by_email_converts_document(self):
        self.collection.find_one.return_value = _doc()

        user = self.repo.get_by_email('ada@example.com')

        self.assertEqual(user.id, 'user-1')
        self.assertEqual(user.first_name, 'Ada')
        self.assertEqual(user.role, Role.ADMIN)
        self.collection.find_one.assert_called_once_with({'email': 'ada@example.com'})

    def test_get_by_id_not_found(self):
        self.collection.find_one.return_value = None

        self.assertIsNone(self.repo.get_by_id('missing'))
        self.collection.find_one.assert_called_once_with({'_id': 'missing'})

    def test_missing_role_defaults_to_user(self):
        doc = _doc()
        del doc['role']
        self.collection.find_one.return_value = doc

        self.assertEqual(self.repo.get_by_id('user-1').role, Role.USER)

    def test_read_failure_raises_repository_error(self):
        self.collection.find_one.side_effect = PyMongoError("connection reset")

        with self.assertRaises(RepositoryError):
            self.repo.get_by_email('ada@example.com')

    def test_find_many_counts_sorts_skips_and_limits(self):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.__iter__.return_value = iter([_doc(_id='a'), _doc(_id='b')])
        self.collection.find.return_value = cursor
        self.collection.count_documents.return_value = 12

        result = self.repo.find_many(skip=4, limit=2)

        self.assertEqual([u.id for u in result.items], ['a', 'b'])
        self.assertEqual(result.total, 12)
        self.collection.count_documents.assert_called_once_with({})
        cursor.sort.assert_called_once_with(NATURAL_ORDER)
        cursor.skip.assert_called_once_with(4)
        cursor.limit.assert_called_once_with(2)

    def test_find_all_sorts_by_natural_order(self):
        cursor = MagicMock()
        cursor.sort.return_value = iter([_doc()])
        self.collection.find.return_value = cursor

        users = self.repo.find_all()

        self.assertEqual(len(users), 1)
        cursor.sort.assert_called_once_with(NATURAL_ORDER)


class TestWrites(MongoRepositoryTestCase):

    @patch('adapter.mongodb.user_repository.uuid')
    @patch('adapter.mongodb.user_repository.datetime')
    def test_create_inserts_document(self, mock_datetime, mock_uuid):
        mock_uuid.uuid4.return_value.hex = 'new-user-id'
        mock_datetime.now.return_value = NOW

        user = self.repo.create(UserData('Ada', 'Lovelace', 'ada@example.com', 'hash', Role.USER))

        self.assertEqual(user.id, 'new-user-id')
        self.assertEqual(user.created_at, NOW)
        self.collection.insert_one.assert_called_once_with({
            '_id': 'new-user-id',
            'first_name': 'Ada',
            'last_name': 'Lovelace',
            'email': 'ada@example.com',
            'password_hash': 'hash',
            'role': 'USER',
            'created_at': NOW,
            'updated_at': NOW,
        })

    def test_create_failure_raises_repository_error(self):
        self.collection.insert_one.side_effect = PyMongoError("write failed")

        with self.assertRaises(RepositoryError):
            self.repo.create(UserData('Ada', 'Lovelace', 'ada@example.com'))

    def test_replace_sets_all_writable_fields(self):
        self.collection.update_one.return_value.matched_count = 1

        result = self.repo.replace('user-1', UserData('Grace', 'Hopper', 'grace@example.com', 'h', Role.ADMIN))

        self.assertTrue(result)
        query, update = self.collection.update_one.call_args[0]
        self.assertEqual(query, {'_id': 'user-1'})
        fields = update['$set']
        self.assertEqual(fields['first_name'], 'Grace')
        self.assertEqual(fields['role'], 'ADMIN')
        self.assertNotIn('created_at', fields)
        self.assertIn('updated_at', fields)

    def test_replace_unmatched_returns_false(self):
        self.collection.update_one.return_value.matched_count = 0

        self.assertFalse(self.repo.replace('missing', UserData('A', 'B', 'c@example.com')))

    def test_delete(self):
        self.collection.delete_one.return_value.deleted_count = 1
        self.assertTrue(self.repo.delete('user-1'))
        self.collection.delete_one.assert_called_once_with({'_id': 'user-1'})

        self.collection.delete_one.return_value.deleted_count = 0
        self.assertFalse(self.repo.delete('user-1'))


class TestIndexes(MongoRepositoryTestCase):

    def test_ensure_indexes_creates_non_unique_email_index(self):
        self.assertTrue(self.repo.ensure_indexes())

        calls = self.collection.create_index.call_args_list
        self.assertEqual(calls[0].args[0], [('email', 1)])
        self.assertEqual(calls[0].kwargs, {'name': 'idx_users_email'})

    def test_conflicting_unique_index_is_dropped_and_recreated(self):
        collection = MagicMock()
        collection.create_index.side_effect = [OperationFailure("Index already exists with different options"), None]
        collection.index_information.return_value = {
            '_id_': {'key': [('_id', 1)]},
            'idx_users_email': {'key': [('email', 1)], 'unique': True},
        }

        self.assertTrue(create_index_safe(collection, [('email', 1)], 'idx_users_email'))
        collection.drop_index.assert_called_once_with('idx_users_email')

    def test_unrelated_error_is_raised(self):
        collection = MagicMock()
        collection.create_index.side_effect = OperationFailure("not authorized")

        with self.assertRaises(OperationFailure):
            create_index_safe(collection, [('email', 1)], 'idx_users_email')


if __name__ == '__main__':
    unittest.main()
