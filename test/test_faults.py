"""
Faults behavioral tests.

Scope
- Validate fault construction, options and copy.replace() support.
- Validate trigger() outside and inside shell mode.
- Validate rich rendering (header, message, hint) and host code relabelling.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import contextlib
import copy
import io
import sys
import unittest
from unittest import TestCase

from rich.console import Console

from minnow import (
    FaultCode,
    AppException,
    AppWarning,
    DuplicateNameError,
    EmptyNameError,
    MissingValueError,
    RepeatedOptionWarning,
    trigger,
)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def tearDown(self):
        vars(sys.modules["__main__"]).pop("__codes__", None)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11113")

    def testNormalizeUsesHostCodes(self):
        sys.modules["__main__"].__codes__ = {FaultCode.MISSING_VALUE: "E-VALUE"}
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
        self.assertEqual(FaultCode.EMPTY_NAME.normalize(), "10101")


class TestFaults(TestCase):
    """Behavioral tests for AppException and AppWarning."""

    def testMessageAndOptions(self):
        fault = MissingValueError("option '--left' requires a value", token="--left", index=3)
        self.assertEqual(str(fault), "option '--left' requires a value")
        self.assertEqual(fault.options["index"], 3)
        with self.assertRaises(TypeError):
            fault.options["index"] = 4

    def testHierarchy(self):
        self.assertTrue(issubclass(EmptyNameError, DuplicateNameError))
        self.assertTrue(issubclass(DuplicateNameError, ValueError))
        self.assertTrue(issubclass(RepeatedOptionWarning, Warning))
        self.assertFalse(issubclass(AppWarning, AppException))

    def testReplaceKeepsOptions(self):
        fault = MissingValueError("missing", token="--left")
        copied = copy.replace(fault, hint="add a value")
        self.assertIsNot(copied, fault)
        self.assertIs(type(copied), MissingValueError)
        self.assertEqual(copied.message, "missing")
        self.assertEqual(dict(copied.options), {"token": "--left", "hint": "add a value"})

    def testTriggerRaisesCopyWithOptions(self):
        with self.assertRaises(MissingValueError) as context:
            trigger(MissingValueError("missing"), colorful=False)
        self.assertFalse(context.exception.options["colorful"])

    def testTriggerWarns(self):
        with self.assertWarns(RepeatedOptionWarning):
            trigger(RepeatedOptionWarning("repeated"))

    def testTriggerRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testShellPrintsAndExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(MissingValueError("missing", hint="add a value"), shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing", stderr.getvalue())
        self.assertIn("add a value", stderr.getvalue())

    def testShellWarningDoesNotExit(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            trigger(RepeatedOptionWarning("repeated"), shell=True, colorful=False)
        self.assertIn("repeated", stderr.getvalue())

    def testRendering(self):
        buffer = io.StringIO()
        fault = MissingValueError(
            "option '--left' requires a value",
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value",
            colorful=False,
        )
        Console(file=buffer, width=120).print(fault)
        lines = buffer.getvalue().splitlines()
        self.assertIn("11113", lines[0])
        self.assertIn("Missing Value", lines[0])
        self.assertEqual(lines[1], "option '--left' requires a value")
        self.assertIn("pass a value", lines[2])


if __name__ == "__main__":
    unittest.main()
