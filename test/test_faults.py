# python
"""
Fault behavioral tests (codes, structured options, rendering, trigger).

Scope
- Validate fault codes and titles per class, read-only structured options.
- Validate rich rendering (header, message, hint) and host code relabelling.
- Validate trigger(): renders to stderr and exits with status 1.

Conventions
- Test method names follow CamelCase per project convention.
- The module console is swapped for a StringIO-backed one while rendering.
"""

from __future__ import annotations

import __main__
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from sopt import (
    faults,
    Options,
    VarType,
    FaultCode,
    OptionsException,
    UnknownOptionError,
    MissingRequiredError,
    trigger,
)


def _render(fault):
    buffer = io.StringIO()
    Console(file=buffer, width=120, color_system=None).print(fault)
    return buffer.getvalue()


class TestFaultData(TestCase):
    """Codes, messages and structured options."""

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.LONG_SHORT, 21101)
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 21111)
        self.assertEqual(FaultCode.MISSING_REQUIRED, 21121)
        self.assertEqual(FaultCode.MISSING_FUNC, 21131)

    def testMessageAndOptions(self):
        fault = UnknownOptionError("unknown option '--x'", input="--x", hint="check it")
        self.assertEqual(str(fault), "unknown option '--x'")
        self.assertEqual(fault.options["code"], FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.options["title"], "unknown option")
        self.assertEqual(fault.input, "--x")
        self.assertIsInstance(fault, OptionsException)

    def testOptionsAreReadOnly(self):
        fault = MissingRequiredError("missing", input="-n")
        with self.assertRaises(TypeError):
            fault.options["input"] = "-m"

    def testReplaceKeepsTypeAndMessage(self):
        fault = MissingRequiredError("missing", input="-n")
        replaced = fault.__replace__(hint="add -n")
        self.assertIsInstance(replaced, MissingRequiredError)
        self.assertEqual(replaced.message, "missing")
        self.assertEqual(replaced.options["hint"], "add -n")
        self.assertEqual(replaced.input, "-n")


class TestFaultRendering(TestCase):
    """Rich rendering of faults."""

    def testPlainRendering(self):
        fault = UnknownOptionError("unknown option '--x'", hint="did you mean '--y'?", colorful=False)
        output = _render(fault)
        self.assertIn("21111 | Unknown Option ]", output)
        self.assertIn("unknown option '--x'", output)
        self.assertIn("did you mean '--y'?", output)

    def testHostCodeRelabelling(self):
        with mock.patch.object(__main__, "__codes__", {FaultCode.UNKNOWN_OPTION: "E-UNKNOWN"}, create=True):
            output = _render(UnknownOptionError("unknown option '--x'", colorful=False))
        self.assertIn("E-UNKNOWN | Unknown Option ]", output)

    def testHostProgramName(self):
        with mock.patch.object(__main__, "__prog__", "moo-tool", create=True):
            output = _render(UnknownOptionError("unknown option '--x'", colorful=False))
        self.assertIn("[ moo-tool ", output)

    def testFancyRendering(self):
        output = _render(UnknownOptionError("unknown option '--x'", colorful=False, fancy=True))
        self.assertIn("Unknown Option ]", output)
        self.assertIn("unknown option '--x'", output)


class TestTrigger(TestCase):
    """trigger() and Options.trigger()."""

    def testTriggerExitsOne(self):
        buffer = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=buffer, width=120, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingRequiredError("required option '-n' was not supplied"), colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("required option '-n' was not supplied", buffer.getvalue())

    def testOptionsTriggerUsesPresentationFlags(self):
        options = Options(colorful=False, fancy=True)
        options.set_option("", "n", "name", "Name.", "", True, VarType.STRING)
        with self.assertRaises(MissingRequiredError) as context:
            options.parse_args([])

        buffer = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=buffer, width=120, color_system=None)):
            with self.assertRaises(SystemExit):
                options.trigger(context.exception)
        self.assertIn("Missing Required Option ]", buffer.getvalue())

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
