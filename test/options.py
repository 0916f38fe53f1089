"""
Option definition tests (names, arity, validation, groups).

Scope
- CommandOption construction: name rules, arity, value and help validation.
- Derived properties: label, names; __replace__ re-validates.
- CommandGroup: name handling, option type checks, iteration.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from posixopts import *


def flag():
    return BoolType(Slot(False))


class TestCommandOptionNames(TestCase):
    """Long and short name rules."""

    def testLongAndShort(self):
        option = CommandOption("dry-run", "n", Arity.NONE, flag(), "Do nothing.")
        self.assertEqual(option.long, "dry-run")
        self.assertEqual(option.short, "n")
        self.assertEqual(option.label, "--dry-run")
        self.assertEqual(option.names, ("-n", "--dry-run"))
        self.assertEqual(option.help, "Do nothing.")
        self.assertIs(option.arity, Arity.NONE)
        self.assertFalse(option.repeatable)

    def testShortOnly(self):
        option = CommandOption(None, "q", Arity.NONE, flag())
        self.assertIsNone(option.long)
        self.assertEqual(option.label, "-q")
        self.assertEqual(option.names, ("-q",))

    def testLongOnly(self):
        option = CommandOption("quiet", None, Arity.NONE, flag())
        self.assertEqual(option.names, ("--quiet",))

    def testNoNameRejected(self):
        with self.assertRaises(MalformedOptionError) as context:
            CommandOption(None, None, Arity.NONE, flag())
        self.assertEqual(context.exception.code, FaultCode.MALFORMED_OPTION)

    def testMalformedLongNames(self):
        for long in ("", "--int", "-int", "a=b", "two words", " int"):
            with self.subTest(long=long):
                with self.assertRaises(MalformedOptionError):
                    CommandOption(long, None, Arity.NONE, flag())

    def testMalformedShortNames(self):
        for short in ("", "ab", "-", ":", "?", "=", " ", "\n"):
            with self.subTest(short=short):
                with self.assertRaises(MalformedOptionError):
                    CommandOption(None, short, Arity.NONE, flag())

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            CommandOption(1, None, Arity.NONE, flag())
        with self.assertRaises(TypeError):
            CommandOption(None, 1, Arity.NONE, flag())

    def testConfigurationErrorIsValueError(self):
        with self.assertRaises(ValueError):
            CommandOption("", None, Arity.NONE, flag())


class TestCommandOptionFields(TestCase):
    """Arity, value and help validation."""

    def testArityMustBeMember(self):
        for arity in ("required", 1, None, True):
            with self.subTest(arity=arity):
                with self.assertRaises(ConflictingArityError) as context:
                    CommandOption("int", "i", arity, IntType(Slot()))
                self.assertEqual(context.exception.code, FaultCode.CONFLICTING_ARITY)

    def testValueRequired(self):
        with self.assertRaises(TypeError):
            CommandOption("int", "i", Arity.REQUIRED)
        with self.assertRaises(TypeError):
            CommandOption("int", "i", Arity.REQUIRED, Slot())

    def testHelpMustBeString(self):
        with self.assertRaises(TypeError):
            CommandOption("int", "i", Arity.REQUIRED, IntType(Slot()), None)

    def testHelpStripped(self):
        option = CommandOption("int", "i", Arity.REQUIRED, IntType(Slot()), "  Set it.  ")
        self.assertEqual(option.help, "Set it.")

    def testRepeatableFlag(self):
        option = CommandOption("cstring", "c", Arity.REQUIRED, StringListType(Slot([])), repeatable=True)
        self.assertTrue(option.repeatable)

    def testReplaceRevalidates(self):
        value = IntType(Slot())
        option = CommandOption("int", "i", Arity.REQUIRED, value, "Set it.")
        renamed = copy.replace(option, long="number")
        self.assertEqual(renamed.long, "number")
        self.assertEqual(renamed.short, "i")
        self.assertIs(renamed.value, value)
        self.assertEqual(option.long, "int")
        with self.assertRaises(MalformedOptionError):
            copy.replace(option, long="--number")


class TestCommandGroup(TestCase):
    """Named option groups."""

    def testNameAndOrder(self):
        first = CommandOption("int", "i", Arity.REQUIRED, IntType(Slot()))
        second = CommandOption("bool", "b", Arity.NONE, flag())
        group = CommandGroup("  Default  ", [first, second])
        self.assertEqual(group.name, "Default")
        self.assertEqual(list(group), [first, second])
        self.assertEqual(group.options, (first, second))
        self.assertEqual(len(group), 2)

    def testEmptyGroup(self):
        self.assertEqual(len(CommandGroup("Empty")), 0)

    def testNameValidation(self):
        with self.assertRaises(TypeError):
            CommandGroup(None)
        with self.assertRaises(ValueError):
            CommandGroup("   ")

    def testOptionsValidation(self):
        with self.assertRaises(TypeError):
            CommandGroup("Default", ["--int"])

    def testOptionsSnapshot(self):
        options = [CommandOption("int", "i", Arity.REQUIRED, IntType(Slot()))]
        group = CommandGroup("Default", options)
        options.append(CommandOption("bool", "b", Arity.NONE, flag()))
        self.assertEqual(len(group), 1)


if __name__ == "__main__":
    unittest.main()
