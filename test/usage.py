"""
Usage renderer behavioral tests (synopsis, tables, determinism, styling).

Conventions
- Test method names follow CamelCase per project convention.
- Expected rows are spelled with the same "  %-18s %s" layout the renderer uses.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.text import Text

from optline import Registry, Rest, Slot, Usage


def _registry():
    registry = Registry("tool").reset("default")
    registry.value("o", "output", descr="Output file")
    registry.positional("src", Slot("dst", required=False), rest="extra")
    return registry


class TestUsage(TestCase):
    def testLayout(self):
        self.assertEqual(_registry().render_usage(), "\n".join([
            "usage: tool [options] src [dst] [-- extra...]",
            "",
            "options:",
            "  %-18s %s" % ("-h|--help", "Show help"),
            "  %-18s %s" % ("-o|--output", "Output file"),
            "  %-18s %s" % ("--verbose", "Show debug messages"),
        ]))

    def testTwoFreshRegistriesRenderIdentically(self):
        self.assertEqual(_registry().render_usage(), _registry().render_usage())

    def testHiddenOptionsAreLeftOut(self):
        rendered = _registry().render_usage()
        self.assertNotIn("--color", rendered)
        self.assertNotIn("--no-color", rendered)

    def testRowsSortedByCanonicalName(self):
        registry = Registry("tool")
        registry.flag("z", "zebra", descr="Last")
        registry.flag("a", "apple", descr="First")
        labels = [label for _, label, _ in registry.usage().rows()]
        self.assertEqual(labels, ["-a|--apple", "-z|--zebra"])

    def testColumnGrowsWithLongestLabel(self):
        registry = Registry("tool")
        registry.flag("d", "dry-run-without-side-effects", descr="Simulate")
        registry.flag("q", descr="Quiet")
        lines = registry.render_usage().splitlines()
        self.assertEqual(lines[-2], "  -d|--dry-run-without-side-effects Simulate")
        self.assertEqual(lines[-1], "  %-33s %s" % ("-q", "Quiet"))

    def testArgumentsTable(self):
        registry = Registry("tool")
        registry.positional(Slot("src", descr="Source file"), rest=Rest("more", descr="Other files"))
        self.assertEqual(registry.render_usage(), "\n".join([
            "usage: tool src [-- more...]",
            "",
            "arguments:",
            "  %-18s %s" % ("src", "Source file"),
            "  %-18s %s" % ("more...", "Other files"),
        ]))

    def testTailSynopsis(self):
        registry = Registry("tool")
        registry.positional(rest=Rest("files", minimum=1), tail="command")
        self.assertEqual(registry.render_usage(), "usage: tool [-- files...] [-- command...]")

    def testRestMinimumWithoutTail(self):
        registry = Registry("tool")
        registry.positional(rest=Rest("files", minimum=1))
        self.assertEqual(registry.render_usage(), "usage: tool [-- files...]")

    def testColorfulTextKeepsPlainContent(self):
        registry = _registry()
        styled = registry.usage(colorful=True).text()
        self.assertIsInstance(styled, Text)
        self.assertTrue(styled.spans)
        self.assertEqual(styled.plain, registry.render_usage())
        self.assertFalse(registry.usage().text().spans)

    def testUsageIsBoundToRegistry(self):
        usage = Usage(_registry())
        self.assertFalse(usage.colorful)
        self.assertEqual(str(usage), usage.render())


if __name__ == "__main__":
    unittest.main()
