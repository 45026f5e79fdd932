from typing import Iterable
from unittest import main as ut_main

from structlog import get_logger
from twisted.trial import unittest

from redis_record.wire import NIL, Array, BulkString, WireValue

logger = get_logger()
main = ut_main


def bulk_array(*items: str | bytes | None) -> Array:
    """ Build the array a RESP2 server would reply with, `None` items are nil.
    """
    values: list[WireValue] = []
    for item in items:
        if item is None:
            values.append(NIL)
        elif isinstance(item, str):
            values.append(BulkString(item.encode('utf-8')))
        else:
            values.append(BulkString(item))
    return Array(tuple(values))


class TestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.log = logger.new()

    def assertArgs(self, args: Iterable[bytes], expected: Iterable[str]) -> None:
        """ Compare arguments against their text, it reads better than a list of bytes.
        """
        self.assertEqual(list(args), [i.encode('utf-8') for i in expected])
