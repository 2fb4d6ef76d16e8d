# python
"""
Renderer and fault rendering tests.

Scope
- render_help(): usage line, commands table, option groups, hidden entries, notes and examples.
- render_version(): program and version.
- UsageError.__rich__(): header, message and hint; colorful/fancy options.
- trigger(): raise outside shell mode, print and exit in shell mode.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with a rich Console writing to a buffer, without color.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman import (
    CommandSpec,
    FaultCode,
    OptionSpec,
    Schema,
    UnknownSwitchError,
    UsageError,
    parse,
    render_help,
    render_version,
    trigger,
)


def capture(renderable):
    console = Console(file=io.StringIO(), width=160, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def build():
    return Schema(
        options=[
            OptionSpec("vlc", descr="VLC", group="streaming"),
            OptionSpec("out", "o", type="string", descr="Set download destination"),
            OptionSpec("port", "p", default=8000, descr="Change the http server port"),
            OptionSpec("dht-port", type="number", placeholder="random"),
            OptionSpec("secret", hidden=True, descr="Never shown"),
        ],
        commands=[
            CommandSpec("download [torrent-ids...]", descr="Download a torrent", default=True),
            CommandSpec("seed <inputs...>", descr="Seed a file or a folder"),
            CommandSpec("debug", descr="Internal", hidden=True),
        ],
    )


class TestRenderHelp(TestCase):
    """Help output."""

    def setUp(self):
        self.schema = build()

    def testRootHelp(self):
        text = capture(render_help(self.schema, prog="webtorrent", colorful=False))
        self.assertIn("usage: webtorrent [command] [torrent-ids...] [options]", text)
        self.assertIn("seed <inputs...>", text)
        self.assertIn("Seed a file or a folder", text)
        self.assertIn("[default]", text)
        self.assertIn("streaming:", text)
        self.assertIn("-o, --out", text)
        self.assertIn("<string>", text)
        self.assertIn("[default: 8000]", text)
        self.assertIn("[default: random]", text)

    def testHiddenEntriesSkipped(self):
        text = capture(render_help(self.schema, colorful=False))
        self.assertNotIn("--secret", text)
        self.assertNotIn("Internal", text)

    def testCommandHelp(self):
        text = capture(render_help(self.schema, self.schema.commands["seed"], prog="webtorrent", colorful=False))
        self.assertIn("usage: webtorrent seed <inputs...> [options]", text)
        self.assertIn("Seed a file or a folder", text)
        self.assertNotIn("Download a torrent", text)

    def testNotesAndExamples(self):
        text = capture(render_help(self.schema, notes=["a note"], examples=["webtorrent seed file"], colorful=False))
        self.assertIn("notes:", text)
        self.assertIn("• a note", text)
        self.assertIn("examples:", text)
        self.assertIn("• webtorrent seed file", text)

    def testFancyPanel(self):
        text = capture(render_help(self.schema, prog="webtorrent", fancy=True, colorful=False))
        self.assertIn("WEBTORRENT HELP", text)

    def testVersion(self):
        text = capture(render_version("webtorrent", "1.2.3", colorful=False))
        self.assertIn("webtorrent — 1.2.3", text)


class TestFaultRendering(TestCase):
    """UsageError rendering and trigger()."""

    def setUp(self):
        self.fault = parse(["--lound"], build())

    def testFaultIsReturnedByParse(self):
        self.assertIsInstance(self.fault, UnknownSwitchError)
        self.assertEqual(self.fault.code, FaultCode.UNKNOWN_SWITCH)

    def testRichRendering(self):
        text = capture(self.fault.__replace__(colorful=False, prog="webtorrent"))
        self.assertIn("[ webtorrent — 21111 | Unknown Option ]", text)
        self.assertIn("unknown option '--lound' at first position", text)
        self.assertIn("→", text)

    def testReplaceMergesOptions(self):
        replaced = self.fault.__replace__(fancy=True)
        self.assertIsInstance(replaced, UnknownSwitchError)
        self.assertIs(replaced.options["fancy"], True)
        self.assertEqual(replaced.token, self.fault.token)
        self.assertNotIn("fancy", self.fault.options)

    def testMessageDefaultsToEmpty(self):
        fault = UsageError()
        self.assertEqual(fault.message, "")
        self.assertEqual(str(fault), "")
        self.assertEqual(str(fault.__replace__(hint="x")), "")

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnknownSwitchError):
            trigger(self.fault)

    def testTriggerExitsInShell(self):
        with self.assertRaises(SystemExit) as context:
            trigger(self.fault, shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)

    def testTriggerRequiresTriggerable(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
