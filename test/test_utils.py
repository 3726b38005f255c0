"""
Utilities behavioral tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from minnow.utils import Unset, UnsetType, coalesce, mirror, ordinal, rename


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", Unset | str))
        self.assertFalse(isinstance(1, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):  # NOQA: F-841
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 1), 1)
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(None, 1))


class TestHelpers(TestCase):
    """Behavioral tests for rename, mirror and ordinal."""

    def testRename(self):
        @rename("shiny")
        def dull():
            pass

        self.assertEqual(dull.__name__, "shiny")
        self.assertEqual(dull.__qualname__, "shiny")
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("x")(1)

    def testMirrorHandsOutCopies(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [["a"], ("b", ["c"])]

        holder = Holder()
        items = holder.items
        items[0].append("z")
        items[1][1].append("z")
        self.assertEqual(holder.items, [["a"], ("b", ["c"])])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(112), "112th")
        self.assertEqual(ordinal(23), "23rd")


if __name__ == "__main__":
    unittest.main()
