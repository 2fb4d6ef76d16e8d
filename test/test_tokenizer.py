# python
"""
Flag tokenizer behavioral tests.

Scope
- Long, short and clustered flags; inline and separate values.
- "--" terminator, lone "-" and negative numbers as positionals.
- Usage faults raised by tokenize(): unknown flags, missing, empty and malformed values.

Conventions
- Test method names follow CamelCase per project convention.
- Occurrences are recorded under the canonical key, as lists of raw values in argument order.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import (
    EmptyValueError,
    FaultCode,
    FlagAssignmentError,
    InvalidNumberError,
    OptionSpec,
    OptionValueRequiredError,
    Schema,
    UnknownSwitchError,
)
from helmsman.tokenizer import tokenize


def build():
    return Schema(options=[
        OptionSpec("quiet", "q"),
        OptionSpec("verbose", "v"),
        OptionSpec("out", "o", type="string"),
        OptionSpec("port", "p", default=8000),
        OptionSpec("chromecast", type="either"),
        OptionSpec("player-args", type="string"),
        OptionSpec("announce", "a", type="string", multiple=True),
    ])


class TestTokenize(TestCase):
    """Flag forms and residual positionals."""

    def setUp(self):
        self.schema = build()

    def testPositionalsOnly(self):
        self.assertEqual(tokenize(["seed", "a", "b"], self.schema), ({}, ("seed", "a", "b")))

    def testBooleanFlags(self):
        flags, residual = tokenize(["--quiet", "-v", "file"], self.schema)
        self.assertEqual(flags, {"quiet": [True], "verbose": [True]})
        self.assertEqual(residual, ("file",))

    def testBooleanInlineTruth(self):
        flags, _ = tokenize(["--quiet=false", "--verbose=TRUE"], self.schema)
        self.assertEqual(flags, {"quiet": [False], "verbose": [True]})

    def testStringValueSeparateAndInline(self):
        self.assertEqual(tokenize(["--out", "dir"], self.schema), ({"out": ["dir"]}, ()))
        self.assertEqual(tokenize(["--out=dir"], self.schema), ({"out": ["dir"]}, ()))
        self.assertEqual(tokenize(["-o", "dir"], self.schema), ({"out": ["dir"]}, ()))
        self.assertEqual(tokenize(["-o=dir"], self.schema), ({"out": ["dir"]}, ()))

    def testInlineValueKeepsDashes(self):
        flags, _ = tokenize(["--player-args=--video-on-top --repeat"], self.schema)
        self.assertEqual(flags, {"player-args": ["--video-on-top --repeat"]})

    def testCamelSpellingRecordedUnderKey(self):
        flags, _ = tokenize(["--playerArgs", "x"], self.schema)
        self.assertEqual(flags, {"player-args": ["x"]})

    def testNumberConversion(self):
        self.assertEqual(tokenize(["--port", "9000"], self.schema)[0], {"port": [9000]})
        self.assertEqual(tokenize(["--port=1.5"], self.schema)[0], {"port": [1.5]})
        self.assertEqual(tokenize(["--port", "-1"], self.schema)[0], {"port": [-1]})

    def testShortCluster(self):
        flags, residual = tokenize(["-qv", "file"], self.schema)
        self.assertEqual(flags, {"quiet": [True], "verbose": [True]})
        self.assertEqual(residual, ("file",))

    def testClusterTailTakesNextToken(self):
        flags, residual = tokenize(["-qo", "dir", "file"], self.schema)
        self.assertEqual(flags, {"quiet": [True], "out": ["dir"]})
        self.assertEqual(residual, ("file",))

    def testClusterAttachedValue(self):
        self.assertEqual(tokenize(["-p8080"], self.schema)[0], {"port": [8080]})
        self.assertEqual(tokenize(["-qodir"], self.schema)[0], {"quiet": [True], "out": ["dir"]})

    def testEitherWithValue(self):
        flags, residual = tokenize(["--chromecast", "living-room"], self.schema)
        self.assertEqual(flags, {"chromecast": ["living-room"]})
        self.assertEqual(residual, ())

    def testEitherWithoutValue(self):
        self.assertEqual(tokenize(["--chromecast"], self.schema)[0], {"chromecast": [""]})
        self.assertEqual(tokenize(["--chromecast", "--quiet"], self.schema)[0], {"chromecast": [""], "quiet": [True]})

    def testMixedSpellingsKeepArgumentOrder(self):
        flags, _ = tokenize(["-a", "udp://one", "--announce", "udp://two", "-a", "udp://three"], self.schema)
        self.assertEqual(flags, {"announce": ["udp://one", "udp://two", "udp://three"]})

    def testAliasAndKeyShareOneList(self):
        flags, _ = tokenize(["-o", "A", "--out", "B", "-o", "C"], self.schema)
        self.assertEqual(flags, {"out": ["A", "B", "C"]})

    def testTerminator(self):
        flags, residual = tokenize(["--quiet", "--", "--out", "-q"], self.schema)
        self.assertEqual(flags, {"quiet": [True]})
        self.assertEqual(residual, ("--out", "-q"))

    def testDashAndNegativeNumbersArePositionals(self):
        self.assertEqual(tokenize(["-", "-5", "-0.5"], self.schema), ({}, ("-", "-5", "-0.5")))

    def testInputIsNotMutated(self):
        args = ["--out", "dir", "file"]
        tokenize(args, self.schema)
        self.assertEqual(args, ["--out", "dir", "file"])


class TestTokenizeFaults(TestCase):
    """Usage faults carry a code, the offending token and the stage."""

    def setUp(self):
        self.schema = build()

    def testUnknownLongFlag(self):
        with self.assertRaises(UnknownSwitchError) as context:
            tokenize(["file", "--quite"], self.schema)
        fault = context.exception
        self.assertEqual(fault.code, FaultCode.UNKNOWN_SWITCH)
        self.assertEqual(fault.token, "--quite")
        self.assertEqual(fault.stage, "tokenize")
        self.assertIn("second position", fault.message)
        self.assertIn("--quiet", fault.options["suggestions"])

    def testUnknownClusterMember(self):
        with self.assertRaises(UnknownSwitchError) as context:
            tokenize(["-qx"], self.schema)
        self.assertEqual(context.exception.token, "-x")

    def testMissingValueAtEnd(self):
        with self.assertRaises(OptionValueRequiredError) as context:
            tokenize(["--out"], self.schema)
        self.assertEqual(context.exception.code, FaultCode.OPTION_VALUE_REQUIRED)

    def testMissingValueBeforeFlag(self):
        with self.assertRaises(OptionValueRequiredError):
            tokenize(["--out", "--quiet"], self.schema)

    def testEmptyInlineValue(self):
        with self.assertRaises(EmptyValueError):
            tokenize(["--out="], self.schema)

    def testBooleanWithValue(self):
        with self.assertRaises(FlagAssignmentError) as context:
            tokenize(["--quiet=yes"], self.schema)
        self.assertEqual(context.exception.token, "--quiet")

    def testInvalidNumber(self):
        with self.assertRaises(InvalidNumberError) as context:
            tokenize(["--port", "http"], self.schema)
        self.assertEqual(context.exception.token, "http")
        self.assertEqual(context.exception.code, FaultCode.INVALID_NUMBER)


if __name__ == "__main__":
    unittest.main()
