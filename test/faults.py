"""
Fault rendering and surfacing tests.

Scope
- Exceptions raise outside shell mode and print + exit inside it.
- Warnings go through the warnings module outside shell mode.
- Rich rendering carries program, code, title, message and hint.
- Host overrides through __main__ (__prog__, __codes__).
"""

from __future__ import annotations

import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from argot import (
    FaultCode,
    ParserException,
    InvalidParameterError,
    DuplicateParameterWarning,
    Short,
    trigger,
)


def _rendered(fault):
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(fault)
    return console.file.getvalue()


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(InvalidParameterError) as context:
            trigger(InvalidParameterError("Invalid parameter '-z'\n", params=(Short("z"),)))
        self.assertEqual(context.exception.params, (Short("z"),))

    def testOptionsAreMerged(self):
        with self.assertRaises(ParserException) as context:
            trigger(ParserException("boom", title="first"), title="second")
        self.assertEqual(context.exception.options["title"], "second")
        self.assertEqual(str(context.exception), "boom")

    def testShellPrintsAndExits(self):
        stderr = io.StringIO()
        with mock.patch("argot.faults.console", Console(file=stderr, width=200)):
            with self.assertRaises(SystemExit):
                trigger(ParserException("boom", title="failure"), shell=True, colorful=False)
        self.assertIn("boom", stderr.getvalue())

    def testWarningOutsideShell(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(DuplicateParameterWarning("twice", title="duplicated parameter"))
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, DuplicateParameterWarning)

    def testWarningInShellDoesNotExit(self):
        stderr = io.StringIO()
        with mock.patch("argot.faults.console", Console(file=stderr, width=200)):
            trigger(DuplicateParameterWarning("twice", title="duplicated parameter"), shell=True)
        self.assertIn("twice", stderr.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


class TestRendering(TestCase):
    """Behavioral tests for rich rendering."""

    def testHeaderAndBody(self):
        output = _rendered(InvalidParameterError(
            "Invalid parameter '-z'\n",
            prog="tool",
            title="invalid parameter",
            code=FaultCode.INVALID_PARAMETER,
            hint="check the spelling",
            colorful=False,
        ))
        self.assertIn("tool", output)
        self.assertIn("21101", output)
        self.assertIn("Invalid Parameter", output)
        self.assertIn("Invalid parameter '-z'", output)
        self.assertIn("check the spelling", output)

    def testFancyPanel(self):
        output = _rendered(ParserException("boom", title="failure", fancy=True, colorful=False))
        self.assertIn("boom", output)
        self.assertIn("Failure", output)

    def testHostOverrides(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "host", create=True), \
                mock.patch.object(main, "__codes__", {FaultCode.INVALID_PARAMETER: "E-INV"}, create=True):
            output = _rendered(InvalidParameterError("bad", code=FaultCode.INVALID_PARAMETER, colorful=False))
        self.assertIn("host", output)
        self.assertIn("E-INV", output)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.DUPLICATED_PARAMETER.normalize(), "22101")


if __name__ == "__main__":
    unittest.main()
