"""
Utils module behavioral tests (Unset sentinel, coalesce, mirror).
"""
from __future__ import annotations

import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from argosy.utils import Unset, UnsetType, coalesce, mirror


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class TestCoalesce(TestCase):

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalseyValues(self):
        for value in (None, 0, "", ()):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class Holder:
    items = mirror("items")
    table = mirror("table")
    missing = mirror("missing")

    def __init__(self):
        self._items = ["a", ["b"]]
        self._table = {"key": ["value"]}
        self._missing = Unset


class TestMirror(TestCase):

    def testSequencesBecomeTuples(self):
        self.assertEqual(Holder().items, ("a", ("b",)))

    def testMappingsBecomeReadOnly(self):
        table = Holder().table
        self.assertIsInstance(table, MappingProxyType)
        self.assertEqual(table["key"], ("value",))

    def testUnsetBecomesNone(self):
        self.assertIsNone(Holder().missing)

    def testPropertyIsReadOnly(self):
        with self.assertRaises(AttributeError):
            Holder().items = ()

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
