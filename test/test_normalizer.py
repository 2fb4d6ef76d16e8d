# python
"""
Alias & type normalizer behavioral tests.

Scope
- Spellings collapse to canonical keys; the last occurrence wins.
- Fixed shape: every declared option appears, with its fallback when absent.
- "either" coercion, multiple collection, negated flags.
- Idempotence: normalizing a normalized mapping changes nothing.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import OptionSpec, Schema, SchemaError
from helmsman.normalizer import normalize
from helmsman.tokenizer import tokenize


def build():
    return Schema(options=[
        OptionSpec("quiet", "q"),
        OptionSpec("out", "o", type="string"),
        OptionSpec("port", "p", default=8000),
        OptionSpec("chromecast", type="either"),
        OptionSpec("announce", "a", type="string", multiple=True),
        OptionSpec("quit", default=True),
        OptionSpec("no-quit"),
        OptionSpec("no-foo"),
    ])


class TestNormalize(TestCase):
    """Canonical keys, fallbacks and coercions."""

    def setUp(self):
        self.schema = build()

    def run_args(self, *args):
        flags, _ = tokenize(args, self.schema)
        return normalize(flags, self.schema)

    def testFallbacksWhenEmpty(self):
        self.assertEqual(normalize({}, self.schema), {
            "quiet": False,
            "out": None,
            "port": 8000,
            "chromecast": False,
            "announce": (),
            "no-quit": False,
            "no-foo": False,
            "quit": True,
            "foo": True,
        })

    def testAliasAndKeyAgree(self):
        self.assertEqual(self.run_args("--out", "dir"), self.run_args("-o", "dir"))
        self.assertEqual(self.run_args("-o", "dir")["out"], "dir")
        self.assertNotIn("o", self.run_args("-o", "dir"))

    def testLastOccurrenceWins(self):
        self.assertEqual(self.run_args("-p", "1", "--port", "2")["port"], 2)

    def testLastOccurrenceWinsAcrossSpellings(self):
        self.assertEqual(self.run_args("-o", "A", "--out", "B", "-o", "C")["out"], "C")
        self.assertEqual(self.run_args("--out", "A", "-o", "B")["out"], "B")

    def testEitherCoercion(self):
        self.assertIs(self.run_args("--chromecast")["chromecast"], True)
        self.assertEqual(self.run_args("--chromecast", "tv")["chromecast"], "tv")
        self.assertIs(self.run_args()["chromecast"], False)

    def testMultipleCollectsEveryOccurrence(self):
        self.assertEqual(self.run_args("-a", "one", "-a", "two")["announce"], ("one", "two"))
        self.assertEqual(self.run_args("--announce", "one")["announce"], ("one",))

    def testMultipleKeepsArgumentOrderAcrossSpellings(self):
        self.assertEqual(self.run_args("-a", "X", "--announce", "Y", "-a", "Z")["announce"], ("X", "Y", "Z"))

    def testNegationAbsent(self):
        self.assertIs(self.run_args()["foo"], True)

    def testNegationPresent(self):
        normalized = self.run_args("--no-foo")
        self.assertIs(normalized["foo"], False)
        self.assertIs(normalized["no-foo"], True)

    def testNegationWinsOverPositiveFlag(self):
        self.assertIs(self.run_args("--no-quit", "--quit")["quit"], False)

    def testIdempotent(self):
        for args in ((), ("-q", "-o", "dir"), ("--no-foo", "--chromecast"), ("-a", "x", "-a", "y", "-p", "9")):
            with self.subTest(args=args):
                once = self.run_args(*args)
                self.assertEqual(normalize(once, self.schema), once)

    def testUnknownKeyIsSchemaError(self):
        with self.assertRaises(SchemaError):
            normalize({"loud": [True]}, self.schema)


if __name__ == "__main__":
    unittest.main()
