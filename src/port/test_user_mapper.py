"""Both mapper implementations expose every UserMapper protocol method."""

import inspect
import unittest
from unittest.mock import MagicMock

from adapter.cassandra.user_mapper import CassandraUserMapper
from adapter.fake.user_mapper import FakeUserMapper
from port.user_mapper import UserMapper

PROTOCOL_METHODS = [
    name for name, member in inspect.getmembers(UserMapper, inspect.isfunction)
    if not name.startswith('_')
]


class TestUserMapperProtocol(unittest.TestCase):
    def test_protocol_methods(self):
        self.assertEqual(sorted(PROTOCOL_METHODS), [
            'delete', 'find_all', 'find_by_id', 'find_page',
            'insert', 'next_page', 'set_page_size', 'update',
        ])

    def test_implementations_match_signatures(self):
        for mapper in (CassandraUserMapper(MagicMock()), FakeUserMapper()):
            for name in PROTOCOL_METHODS:
                with self.subTest(mapper=type(mapper).__name__, method=name):
                    self.assertTrue(hasattr(mapper, name), f"{type(mapper).__name__} missing {name}")
                    expected = list(inspect.signature(getattr(UserMapper, name)).parameters)[1:]
                    actual = list(inspect.signature(getattr(mapper, name)).parameters)
                    self.assertEqual(actual, expected)


if __name__ == '__main__':
    unittest.main()
