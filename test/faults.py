"""
Faults behavioral tests (codes, options, rendering, trigger).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is checked through a recording rich console, never a terminal.
"""

from __future__ import annotations

import copy
import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from optline.faults import (
    ConfigurationError,
    FaultCode,
    MissingValueError,
    ParseError,
    ParseExit,
    UnknownOptionError,
    trigger,
)


def _render(renderable):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestFaults(TestCase):
    def testConfigurationErrorIsValueError(self):
        error = ConfigurationError("duplicate alias", subject="x")
        self.assertIsInstance(error, ValueError)
        self.assertEqual(error.subject, "x")

    def testParseErrorExposesOptions(self):
        error = UnknownOptionError(
            "unknown option '--bogus' at first position",
            code=FaultCode.UNKNOWN_OPTION,
            token="--bogus",
            index=1,
            hint="run 'tool --help'",
        )
        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(error.token, "--bogus")
        self.assertEqual(error.index, 1)
        self.assertEqual(error.hint, "run 'tool --help'")

    def testReplaceMergesOptions(self):
        error = MissingValueError("option '--name' expects a value", token="--name")
        replaced = copy.replace(error, colorful=True)
        self.assertIsInstance(replaced, MissingValueError)
        self.assertEqual(replaced.message, error.message)
        self.assertEqual(replaced.token, "--name")
        self.assertTrue(replaced.options["colorful"])

    def testRenderIncludesCodeTitleAndHint(self):
        error = UnknownOptionError(
            "unknown option '--bogus' at first position",
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="run 'tool --help' to see all options",
            prog="tool",
        )
        output = _render(error)
        self.assertIn("11112", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("'--bogus'", output)
        self.assertIn("run 'tool --help'", output)

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(MissingValueError):
            trigger(MissingValueError("option '--name' expects a value"))

    def testTriggerExitsInShell(self):
        stream = io.StringIO()
        with redirect_stderr(stream), self.assertRaises(SystemExit) as caught:
            trigger(MissingValueError("option '--name' expects a value"), shell=True)
        self.assertEqual(caught.exception.code, 1)
        self.assertIn("'--name'", stream.getvalue())

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())

    def testParseExitGroupsFaultsAndRendersUsage(self):
        faults = (
            UnknownOptionError("unknown option '--bogus' at first position"),
            MissingValueError("option '--name' at second position expects a value"),
        )
        group = ParseExit(faults, usage=Text("usage: tool [options]"))
        self.assertEqual(len(group.exceptions), 2)
        output = _render(group)
        self.assertIn("Bad Exit", output)
        self.assertIn("'--bogus'", output)
        self.assertIn("'--name'", output)
        self.assertIn("usage: tool [options]", output)

    def testFaultCodeNormalizeDefaultsToValue(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11117")


if __name__ == "__main__":
    unittest.main()
