"""
Parser behavioral tests (token classification, value binding, faults).

Scope
- Validate the classification of positional, long, short and help tokens.
- Validate value binding for options (spaced and inline) and flag recording.
- Validate malformed, unrecognized and missing-value faults.
- Validate tokenize() normalization of strings and iterables.

Conventions
- Test method names follow CamelCase per project convention.
- Parser is exercised directly against a Registry; App-level behavior lives in test_app.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from minnow import (
    Option,
    Flag,
    Outcome,
    Parser,
    tokenize,
    MalformedOptionError,
    MissingValueError,
    RepeatedOptionWarning,
    UnrecognizedOptionError,
)
from minnow.registry import Registry


class TestParser(TestCase):
    """Behavioral tests for Parser.parse()."""

    def setUp(self):
        self.registry = Registry()
        self.help = self.registry.add(Flag("help", "h"))
        self.left = self.registry.add(Option("left", "l", default=20))
        self.med = self.registry.add(Option("med", "m", default=-100))
        self.right = self.registry.add(Option("right"))
        self.verbose = self.registry.add(Flag("verbose", "v"))
        self.parser = Parser(self.registry, prog="calc")

    def parse(self, line):
        return self.parser.parse(line.split())

    def testPlainTokensAreAllPositional(self):
        tokens = ["add", "sub", "3", "x.txt", "+1"]
        outcome, namespace, faults = self.parser.parse(tokens)
        self.assertIs(outcome, Outcome.CONTINUE)
        self.assertEqual(namespace.arguments, tokens)
        self.assertEqual(namespace.options, [])
        self.assertEqual(namespace.flags, [])
        self.assertEqual(faults, [])

    def testLongAndShortSpellingsAreEquivalent(self):
        _, long, _ = self.parse("--left 5")
        _, short, _ = self.parse("-l 5")
        self.assertEqual(long.options, short.options)
        self.assertEqual(long.options, [("5", self.left)])

    def testValueConsumesOneExtraToken(self):
        _, namespace, _ = self.parse("a --left 5 b")
        self.assertEqual(namespace.arguments, ["a", "b"])
        self.assertEqual(namespace.first("left"), "5")

    def testFlagsConsumeNothing(self):
        _, namespace, _ = self.parse("--verbose 5 -v")
        self.assertEqual(namespace.arguments, ["5"])
        self.assertEqual(namespace.flags, [self.verbose, self.verbose])
        self.assertTrue(namespace.present("verbose"))

    def testMissingValueAtEnd(self):
        with self.assertRaises(MissingValueError):
            self.parse("add --left")
        with self.assertRaises(MissingValueError):
            self.parse("add -l")

    def testMissingValueBeforeOptionLikeToken(self):
        with self.assertRaises(MissingValueError):
            self.parse("--left -v")
        with self.assertRaises(MissingValueError):
            self.parse("--left -5")
        with self.assertRaises(MissingValueError):
            self.parse("--right --left 3")

    def testBareDashesAreMalformed(self):
        with self.assertRaises(MalformedOptionError):
            self.parse("a --")
        with self.assertRaises(MalformedOptionError):
            self.parse("a -")

    def testShortTokenWithTailIsMalformed(self):
        with self.assertRaises(MalformedOptionError) as context:
            self.parse("-vx")
        self.assertIn("-v -x", context.exception.options["hint"])
        with self.assertRaises(MalformedOptionError):
            self.parse("-l5")

    def testUnrecognizedLongOptionSuggestsNames(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            self.parse("--lefty 3")
        self.assertIn("left", context.exception.options["suggestions"])
        self.assertEqual(context.exception.options["index"], 0)

    def testUnrecognizedShortOption(self):
        with self.assertRaises(UnrecognizedOptionError):
            self.parse("a -z")

    def testNegativeNumberIsNotPositional(self):
        with self.assertRaises(UnrecognizedOptionError):
            self.parse("-1")
        with self.assertRaises(MalformedOptionError):
            self.parse("-100")

    def testHelpTokensStopTheParse(self):
        for token in ("-h", "--help"):
            with self.subTest(token=token):
                outcome, namespace, _ = self.parser.parse(["a", token, "--bogus"])
                self.assertIs(outcome, Outcome.HELP_REQUESTED)

    def testHelpNameNeedsExactToken(self):
        with self.assertRaises(UnrecognizedOptionError):
            self.parse("--helpme")

    def testInlineValue(self):
        _, namespace, _ = self.parse("--med=-100 --left=5")
        self.assertEqual(namespace.first("med"), "-100")
        self.assertEqual(namespace.first("left"), "5")

    def testInlineEmptyValue(self):
        with self.assertRaises(MissingValueError):
            self.parse("--left=")

    def testInlineValueOnFlagIsMalformed(self):
        with self.assertRaises(MalformedOptionError):
            self.parse("--verbose=true")

    def testInlineValueOnUnknownName(self):
        with self.assertRaises(UnrecognizedOptionError):
            self.parse("--bogus=1")

    def testRepeatedOptionIsReportedAndKept(self):
        _, namespace, faults = self.parse("--left 1 -l 2")
        self.assertEqual(namespace.options, [("1", self.left), ("2", self.left)])
        self.assertEqual(namespace.first("left"), "1")
        self.assertEqual(len(faults), 1)
        self.assertIsInstance(faults[0], RepeatedOptionWarning)
        self.assertEqual(faults[0].options["index"], 2)

    def testOptionSetInBaseIsReported(self):
        _, base, _ = self.parse("--left 1")
        _, namespace, faults = self.parser.parse(["--left", "2", "--med", "3"], base)
        self.assertEqual(namespace.first("left"), "2")
        self.assertEqual(len(faults), 1)
        self.assertEqual(faults[0].options["token"], "--left")


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testStringIsSplitOnWhitespace(self):
        self.assertEqual(tokenize("  add\tsub  --left 5 "), ["add", "sub", "--left", "5"])
        self.assertEqual(tokenize(""), [])

    def testIterableIsKeptAsIs(self):
        self.assertEqual(tokenize(("a b", "", "c")), ["a b", "", "c"])

    def testNonStringItemsRejected(self):
        with self.assertRaises(TypeError):
            tokenize(["a", 1])
        with self.assertRaises(TypeError):
            tokenize(42)


if __name__ == "__main__":
    unittest.main()
