"""
Parameter key tests.

Scope
- Equality is tag + payload; Short("a") and Long("a") never compare equal.
- Keys are hashable, immutable and render as they are spelled on the command line.
- resolve() maps strings to keys with the registration rule (one character means short).
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from argot import Param, Short, Long, resolve


class TestParam(TestCase):
    """Behavioral tests for Short/Long keys."""

    def testEqualityByTagAndPayload(self):
        self.assertEqual(Short("a"), Short("a"))
        self.assertEqual(Long("all"), Long("all"))
        self.assertNotEqual(Short("a"), Long("a"))
        self.assertNotEqual(Long("all"), Long("any"))

    def testNotEqualToPlainStrings(self):
        self.assertNotEqual(Short("a"), "a")
        self.assertNotEqual(Long("all"), "all")

    def testHashable(self):
        keys = {Short("a"), Short("a"), Long("a"), Long("all")}
        self.assertEqual(len(keys), 3)

    def testRendering(self):
        self.assertEqual(str(Short("z")), "-z")
        self.assertEqual(str(Long("bogus")), "--bogus")
        self.assertEqual(repr(Long("bogus")), "Long('bogus')")

    def testImmutable(self):
        key = Short("a")
        with self.assertRaises(AttributeError):
            key.payload = "b"

    def testBaseTypeIsAbstract(self):
        with self.assertRaises(TypeError):
            Param("a")

    def testShortValidation(self):
        with self.assertRaises(ValueError):
            Short("ab")
        with self.assertRaises(ValueError):
            Short("")
        with self.assertRaises(TypeError):
            Short(1)

    def testLongAcceptsEmptyName(self):
        self.assertEqual(str(Long("")), "--")

    def testCopyAndPickle(self):
        key = Long("size")
        self.assertEqual(copy.deepcopy(key), key)
        self.assertEqual(pickle.loads(pickle.dumps(key)), key)


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testSingleCharacterIsShort(self):
        self.assertEqual(resolve("s"), Short("s"))

    def testLongerIsLong(self):
        self.assertEqual(resolve("size"), Long("size"))

    def testParamPassesThrough(self):
        key = Long("x")
        self.assertIs(resolve(key), key)

    def testEmptyStringIsLong(self):
        self.assertEqual(resolve(""), Long(""))

    def testRejectsBadKeys(self):
        with self.assertRaises(TypeError):
            resolve(3)


if __name__ == "__main__":
    unittest.main()
