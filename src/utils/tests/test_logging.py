"""Tests for the JSON log formatter."""

import json
import logging
import unittest

from utils.logging import REDACTED, JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord('auth', logging.INFO, __file__, 1, "User %s", ('logged in',), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['message'], "User logged in")
        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'auth')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_included(self):
        data = json.loads(self.formatter.format(_record(userId='u1', fields=['price'])))

        self.assertEqual(data['userId'], 'u1')
        self.assertEqual(data['fields'], ['price'])

    def test_secrets_redacted(self):
        data = json.loads(self.formatter.format(_record(password='pw123456', token='eyJ...')))

        self.assertEqual(data['password'], REDACTED)
        self.assertEqual(data['token'], REDACTED)

    def test_non_serializable_values_stringified(self):
        data = json.loads(self.formatter.format(_record(session=object())))
        self.assertIsInstance(data['session'], str)


if __name__ == '__main__':
    unittest.main()
