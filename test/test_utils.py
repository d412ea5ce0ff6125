# python
"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, copy and pickle.
- coalesce(): only Unset is replaced, other falsy values are kept.
- mirror(): read-only properties that hand out list copies.
- program_name(): __main__.__prog__ first, argv[0] otherwise.
"""
import __main__
import copy
import pickle
import unittest
from unittest import TestCase, mock

from rich.console import Console

from sopt.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        """
        The sentinel is falsy but distinct from None and False.
        """
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders 'Unset' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(Unset)
        self.assertEqual(capture.get().strip(), "Unset")

    def testCopyDeepcopyPickle(self) -> None:
        """
        copy(), deepcopy() and pickle round-trips preserve identity.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionAnnotations(self) -> None:
        """
        The sentinel can appear in PEP 604 unions used by isinstance().
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("name", str | Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, 3000), 3000)
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesAreKept(self) -> None:
        for value in (None, False, 0, 0.0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class ProgramNameTest(TestCase):

    def testHostOverride(self) -> None:
        with mock.patch.object(__main__, "__prog__", "moo-tool", create=True):
            self.assertEqual(program_name(), "moo-tool")

    def testArgvFallback(self) -> None:
        if hasattr(__main__, "__prog__"):
            self.skipTest("the running program sets __prog__")
        with mock.patch("sys.argv", ["/usr/local/bin/moo", "-v"]):
            self.assertEqual(program_name(), "moo")


class MirrorTest(TestCase):

    class Record:
        items = mirror("items")
        name = mirror("name")

        def __init__(self):
            self._items = ["a"]
            self._name = "record"

    def testReadsBackingField(self) -> None:
        self.assertEqual(self.Record().name, "record")

    def testContainersAreCopied(self) -> None:
        record = self.Record()
        record.items.append("b")
        self.assertEqual(record.items, ["a"])

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Record().name = "other"


if __name__ == '__main__':
    unittest.main()
