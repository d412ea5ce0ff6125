# python
"""
Command record behavioral tests.

Scope
- Validate construction rules (name, callback, aliases).
- Validate invocation: residual tokens, return value, missing callback.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from sopt import Command, MissingFuncError


class TestCommand(TestCase):
    """Behavioral tests for Command."""

    def testNameIsStripped(self):
        self.assertEqual(Command("  moo ").name, "moo")

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            Command("   ")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Command(1)

    def testNonCallableCallbackRejected(self):
        with self.assertRaises(TypeError):
            Command("moo", callback="moo")

    def testAliasesValidated(self):
        with self.assertRaises(TypeError):
            Command("moo", aliases="m")
        with self.assertRaises(TypeError):
            Command("moo", aliases=["m", 2])
        with self.assertRaises(ValueError):
            Command("moo", aliases=["m", "m"])

    def testAliasesKeepOrder(self):
        self.assertEqual(Command("moo", aliases=("m", "mu")).aliases, ["m", "mu"])

    def testCallPassesTokensCopy(self):
        received = []
        command = Command("moo", callback=received.append)
        tokens = ["a", "b"]
        command(tokens)
        received[0].append("c")
        self.assertEqual(tokens, ["a", "b"])

    def testCallReturnsCallbackResult(self):
        self.assertEqual(Command("count", callback=len)(["a", "b", "c"]), 3)

    def testCallWithoutCallbackRaises(self):
        with self.assertRaises(MissingFuncError) as context:
            Command("moo")([])
        self.assertEqual(context.exception.input, "moo")

    def testRepr(self):
        self.assertTrue(repr(Command("moo", "Moo.")).startswith("command(name='moo', help='Moo.'"))


if __name__ == "__main__":
    unittest.main()
