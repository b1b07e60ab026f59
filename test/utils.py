"""
Utilities behavioral tests (sentinel, coalesce, pluralize, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optline.utils import Unset, UnsetType, coalesce, mirror, ordinal, pluralize, rename


class TestUnset(TestCase):
    def testUnsetIsFalsyAndSingleton(self):
        self.assertFalse(Unset)
        self.assertIs(UnsetType(), Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):  # NOQA: F-841
                pass

    def testUnsetWorksInUnions(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testCoalesceOnlyReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)


class TestHelpers(TestCase):
    def testRenameSetsNames(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", "b"]

        self.assertEqual(Holder().items, ("a", "b"))

    def testPluralize(self):
        self.assertEqual(pluralize("argument"), "arguments")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("box"), "boxes")
        self.assertEqual(pluralize("missing Option"), "missing Options")

    def testOrdinalWordsThenSuffixes(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(113), "113th")

    def testOrdinalRejectsNonIntegers(self):
        with self.assertRaises(TypeError):
            ordinal("1")
        with self.assertRaises(TypeError):
            ordinal(True)


if __name__ == "__main__":
    unittest.main()
