"""
Options behavioral tests (descriptors, slots, rest collectors, positionals).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optline import (
    ConfigurationError,
    Option,
    Positionals,
    ReadValue,
    Rest,
    SetConstant,
    Slot,
    switch,
)


class TestOption(TestCase):
    def testNameDefaultsToLastAlias(self):
        option = Option("v", "verbose", action=SetConstant("verbose"))
        self.assertEqual(option.name, "verbose")
        self.assertEqual(option.aliases, ("v", "verbose"))

    def testDashedAliasesAreNormalized(self):
        option = Option("-o", "--output", action=ReadValue("output"))
        self.assertEqual(option.aliases, ("o", "output"))
        self.assertEqual(option.switches, ("-o", "--output"))

    def testSwitchForms(self):
        self.assertEqual(switch("x"), "-x")
        self.assertEqual(switch("dry-run"), "--dry-run")

    def testTakesValueComesFromAction(self):
        self.assertTrue(Option("o", action=ReadValue("o")).takes_value)
        self.assertFalse(Option("f", action=SetConstant("f")).takes_value)

    def testEmptyDescriptionHides(self):
        self.assertTrue(Option("v", action=SetConstant("v")).hidden)
        self.assertFalse(Option("v", descr="Verbose", action=SetConstant("v")).hidden)

    def testNoAliasIsConfigurationError(self):
        with self.assertRaises(ConfigurationError):
            Option(action=SetConstant("x"))

    def testNoActionIsConfigurationError(self):
        with self.assertRaises(ConfigurationError):
            Option("x")

    def testActionMustBeAnAction(self):
        with self.assertRaises(TypeError):
            Option("x", action=print)

    def testDuplicateAliasWithinDescriptor(self):
        with self.assertRaises(ConfigurationError):
            Option("v", "-v", action=SetConstant("v"))

    def testMalformedAliases(self):
        for alias in ("", "-verbose", "--v", "_", "dry_run", "9lives", "a b"):
            with self.subTest(alias=alias), self.assertRaises(ConfigurationError):
                Option(alias, action=SetConstant("x"))

    def testUnicodeLettersAreAccepted(self):
        self.assertEqual(Option("ñ", "größe", action=SetConstant("x")).switches, ("-ñ", "--größe"))


class TestPositionals(TestCase):
    def testBareNamesBecomeRequiredSlots(self):
        positionals = Positionals("src", "dst")
        self.assertEqual([slot.name for slot in positionals.required], ["src", "dst"])
        self.assertEqual(positionals.optional, ())

    def testRequiredAfterOptionalRejected(self):
        with self.assertRaises(ConfigurationError):
            Positionals(Slot("a", required=False), Slot("b"))

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ConfigurationError):
            Positionals("a", rest="a")
        with self.assertRaises(ConfigurationError):
            Positionals("a", tail="a")

    def testRequiredSlotCannotHaveDefault(self):
        with self.assertRaises(ConfigurationError):
            Slot("a", default="x")

    def testRestMinimumValidation(self):
        with self.assertRaises(ConfigurationError):
            Rest("files", minimum=-1)
        with self.assertRaises(TypeError):
            Rest("files", minimum="1")

    def testRestFromName(self):
        positionals = Positionals(rest="files")
        self.assertIsInstance(positionals.rest, Rest)
        self.assertEqual(positionals.rest.minimum, 0)

    def testEmptyPositionalsIsFalsy(self):
        self.assertFalse(Positionals())
        self.assertTrue(Positionals(tail="extra"))


if __name__ == "__main__":
    unittest.main()
