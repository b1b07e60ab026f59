"""
Actions behavioral tests (construction, validation, store writes).

Conventions
- Test method names follow CamelCase per project convention.
- Actions are applied through a minimal context carrying only a store.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from optline import Action, AppendValue, Invoke, ReadValue, SetConstant


def _context(**store):
    return SimpleNamespace(store=store)


class TestActions(TestCase):
    def testTakesValueFollowsKind(self):
        self.assertFalse(SetConstant("debug").takes_value)
        self.assertTrue(ReadValue("name").takes_value)
        self.assertTrue(AppendValue("names").takes_value)
        self.assertFalse(Invoke(print).takes_value)

    def testSetConstantWritesItsValue(self):
        context = _context()
        SetConstant("mode", value="fast").__apply__(context)
        self.assertEqual(context.store, {"mode": "fast"})

    def testSetConstantDefaultsToTrue(self):
        context = _context()
        SetConstant("debug").__apply__(context)
        self.assertIs(context.store["debug"], True)

    def testReadValueOverridesEarlierValue(self):
        context = _context(name="old")
        action = ReadValue("name")
        action.__apply__(context, "first")
        action.__apply__(context, "second")
        self.assertEqual(context.store["name"], "second")

    def testAppendValueExtendsCallerList(self):
        initial = ["a"]
        context = _context(names=initial)
        AppendValue("names").__apply__(context, "b")
        self.assertIs(context.store["names"], initial)
        self.assertEqual(initial, ["a", "b"])

    def testAppendValueReplacesNonList(self):
        context = _context(names="scalar")
        AppendValue("names").__apply__(context, "b")
        self.assertEqual(context.store["names"], ["b"])

    def testInvokeCallsCallbackWithContext(self):
        received = []
        context = _context()
        Invoke(received.append).__apply__(context)
        self.assertEqual(received, [context])

    def testTargetIsTrimmedAndValidated(self):
        self.assertEqual(SetConstant("  debug ").target, "debug")
        with self.assertRaises(ValueError):
            SetConstant("   ")
        with self.assertRaises(TypeError):
            SetConstant(3)

    def testConverterMustBeCallable(self):
        with self.assertRaises(TypeError):
            ReadValue("level", type="int")

    def testChoicesRules(self):
        self.assertEqual(ReadValue("mode", choices=["a", "b"]).choices, ("a", "b"))
        self.assertEqual(ReadValue("mode", choices={"a", "b"}).choices, frozenset({"a", "b"}))
        with self.assertRaises(ValueError):
            ReadValue("mode", choices=["a", "a"])
        with self.assertRaises(TypeError):
            ReadValue("mode", choices="ab")

    def testInvokeRequiresCallable(self):
        with self.assertRaises(TypeError):
            Invoke("not callable")

    def testBaseActionIsAbstract(self):
        with self.assertRaises(NotImplementedError):
            Action().__apply__(_context())

    def testRepr(self):
        self.assertEqual(repr(SetConstant("debug")), "set-constant(target='debug', value=True)")


if __name__ == "__main__":
    unittest.main()
