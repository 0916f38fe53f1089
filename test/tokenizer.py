"""
Tokenizer tests (event stream, cursor state, independence of concurrent scans).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from posixopts import *
from posixopts.registry import Registry
from posixopts.tokenizer import Match, Tokenizer


def registry():
    return Registry([CommandGroup("Options", [
        CommandOption("int", "i", Arity.REQUIRED, IntType(Slot())),
        CommandOption("bool", "b", Arity.NONE, BoolType(Slot())),
        CommandOption("ostring", "o", Arity.OPTIONAL, StringType(Slot())),
    ])])


def events(argv, **options):
    tokenizer = Tokenizer(registry(), argv, **options)
    return list(tokenizer), tokenizer


class TestTokenizerEvents(TestCase):
    """Matches and faults in argv order."""

    def testMatchFields(self):
        (match,), tokenizer = events(["--int", "5"])
        self.assertIsInstance(match, Match)
        self.assertEqual(match.option.long, "int")
        self.assertEqual(match.argument, "5")
        self.assertEqual(match.token, "--int")
        self.assertEqual(match.index, 0)
        self.assertEqual(tokenizer.index, 2)

    def testClusterEvents(self):
        stream, tokenizer = events(["-bbi", "3", "x"])
        self.assertEqual([(event.option.long, event.argument, event.index) for event in stream], [
            ("bool", None, 0),
            ("bool", None, 0),
            ("int", "3", 0),
        ])
        self.assertEqual(tokenizer.index, 2)

    def testOptionalShortTakesRest(self):
        stream, tokenizer = events(["-bovalue", "-o"])
        self.assertEqual([event.argument for event in stream], [None, "value", None])
        self.assertEqual(tokenizer.index, 2)

    def testEmptyInlineArgumentPassedThrough(self):
        (match,), tokenizer = events(["--int="])
        self.assertEqual(match.argument, "")

    def testUnknownRecorded(self):
        stream, tokenizer = events(["-b", "--nope", "x"])
        self.assertIsInstance(stream[1], UnknownOptionError)
        self.assertEqual(stream[1].index, 1)
        self.assertEqual(tokenizer.unmatched, "--nope")
        self.assertEqual(tokenizer.index, 2)

    def testUnknownSuggestion(self):
        (fault,), tokenizer = events(["--bol"])
        self.assertIn("--bool", fault.options["hint"])

    def testAmbiguousCandidates(self):
        groups = [CommandGroup("Options", [
            CommandOption("string", None, Arity.REQUIRED, StringType(Slot())),
            CommandOption("sep", None, Arity.REQUIRED, StringType(Slot())),
        ])]
        tokenizer = Tokenizer(Registry(groups), ["--s", "x"])
        (fault,) = list(tokenizer)
        self.assertIsInstance(fault, AmbiguousOptionError)
        self.assertEqual([option.long for option in fault.options["candidates"]], ["string", "sep"])
        self.assertEqual(tokenizer.index, 1)

    def testUnexpectedArgument(self):
        (fault,), tokenizer = events(["--bool=1"])
        self.assertIsInstance(fault, UnexpectedArgumentError)
        self.assertEqual(fault.code, FaultCode.UNEXPECTED_ARGUMENT)
        self.assertEqual(tokenizer.index, 1)

    def testMissingArgument(self):
        (fault,), tokenizer = events(["-i"])
        self.assertIsInstance(fault, MissingArgumentError)
        self.assertEqual(fault.options["option"].long, "int")
        self.assertEqual(tokenizer.index, 1)

    def testMissingArgumentInsideCluster(self):
        stream, tokenizer = events(["-bi"])
        self.assertIsInstance(stream[0], Match)
        self.assertIsInstance(stream[1], MissingArgumentError)
        self.assertEqual(stream[1].token, "-bi")


class TestTokenizerStops(TestCase):
    """Where scanning ends."""

    def testEndOfArgv(self):
        stream, tokenizer = events(["-b"])
        self.assertEqual(tokenizer.index, 1)

    def testEmptyArgv(self):
        stream, tokenizer = events([])
        self.assertEqual(stream, [])
        self.assertEqual(tokenizer.index, 0)

    def testDoubleDash(self):
        stream, tokenizer = events(["--", "-b"])
        self.assertEqual(stream, [])
        self.assertEqual(tokenizer.index, 1)

    def testLoneDash(self):
        stream, tokenizer = events(["-b", "-", "-b"])
        self.assertEqual(len(stream), 1)
        self.assertEqual(tokenizer.index, 1)

    def testExhaustedStaysExhausted(self):
        stream, tokenizer = events(["x", "-b"])
        self.assertEqual(list(tokenizer), [])
        self.assertEqual(tokenizer.index, 0)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            Tokenizer(registry(), ["-b", 1])


class TestTokenizerIndependence(TestCase):
    """Two scans interleaved over the same registry do not share a cursor."""

    def testInterleaved(self):
        shared = registry()
        first = Tokenizer(shared, ["-b", "-i", "1"])
        second = Tokenizer(shared, ["--int=2", "rest"])
        self.assertEqual(next(first).option.long, "bool")
        self.assertEqual(next(second).argument, "2")
        self.assertEqual(next(first).argument, "1")
        self.assertEqual(list(second), [])
        self.assertEqual(list(first), [])
        self.assertEqual((first.index, second.index), (3, 1))


if __name__ == "__main__":
    unittest.main()
