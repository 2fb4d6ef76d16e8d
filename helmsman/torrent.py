"""
Schema of the torrent command-line tool.

Options are grouped the way the tool's help shows them (streaming, simple, advanced)
and commands follow its usage:

    download [torrent-ids...]     (default command)
    downloadmeta <torrent-ids...>
    seed <inputs...>
    create <input>
    info <torrent-id>
    version
    help

Handlers here stop at the engine boundary: they pretty-print the resolved command
and the options that differ from their fallbacks, and return that summary. The
actual transfers, players and casting devices live outside this package.
"""
from rich.console import Console
from rich.pretty import Pretty
from rich.panel import Panel

from . import __version__
from .render import render_help, render_version
from .schema import OptionSpec, Schema, command

PROG = "webtorrent"

console = Console()

STREAMING = "options (streaming)"
SIMPLE = "options (simple)"
ADVANCED = "options (advanced)"

OPTIONS = (
    # streaming
    OptionSpec("airplay", descr="Apple TV", group=STREAMING),
    OptionSpec("chromecast", type="either", descr="Google Chromecast", placeholder="all", group=STREAMING),
    OptionSpec("dlna", descr="DNLA", group=STREAMING),
    OptionSpec("mplayer", descr="MPlayer", group=STREAMING),
    OptionSpec("mpv", descr="MPV", group=STREAMING),
    OptionSpec("omx", type="either", descr="OMX", placeholder="hdmi", group=STREAMING),
    OptionSpec("vlc", descr="VLC", group=STREAMING),
    OptionSpec("iina", descr="IINA", group=STREAMING),
    OptionSpec("smplayer", descr="SMPlayer", group=STREAMING),
    OptionSpec("xbmc", descr="XBMC", group=STREAMING),
    OptionSpec("stdout", descr="Standard out (implies --quiet)", group=STREAMING),

    # simple
    OptionSpec("out", "o", type="string", descr="Set download destination", group=SIMPLE),
    OptionSpec("select", "s", type="either", descr="Select specific file in torrent", group=SIMPLE),
    OptionSpec("subtitles", "t", type="string", descr="Load subtitles file", group=SIMPLE),
    OptionSpec("help", "h", descr="Show help information", group=SIMPLE),
    OptionSpec("version", "v", descr="Show version information", group=SIMPLE),

    # advanced
    OptionSpec("port", "p", default=8000, descr="Change the http server port", group=ADVANCED),
    OptionSpec("blocklist", "b", type="string", descr="Load blocklist file/url", group=ADVANCED),
    OptionSpec("announce", "a", type="string", descr="Tracker URL to announce to", multiple=True, group=ADVANCED),
    OptionSpec("quiet", "q", descr="Don't show UI on stdout", group=ADVANCED),
    OptionSpec("pip", descr="Enter Picture-in-Picture if supported by the player", group=ADVANCED),
    OptionSpec("verbose", descr="Show torrent protocol details", group=ADVANCED),
    OptionSpec("playlist", descr="Open files in a playlist if supported by the player", group=ADVANCED),
    OptionSpec("player-args", type="string", descr="Add player specific arguments (see example)", group=ADVANCED),
    OptionSpec("torrent-port", type="number", descr="Change the torrent seeding port", placeholder="random", group=ADVANCED),
    OptionSpec("dht-port", type="number", descr="Change the dht port", placeholder="random", group=ADVANCED),
    OptionSpec("not-on-top", descr="Don't set \"always on top\" option in player", group=ADVANCED),
    OptionSpec("keep-seeding", descr="Don't quit when done downloading", group=ADVANCED),
    OptionSpec("no-quit", descr="Don't quit when player exits", group=ADVANCED),
    OptionSpec("quit", default=True, hidden=True, group=ADVANCED),
    OptionSpec("on-done", type="string", descr="Run script after torrent download is done", group=ADVANCED),
    OptionSpec("on-exit", type="string", descr="Run script before program exit", group=ADVANCED),
)

PLAYERS = ("airplay", "chromecast", "dlna", "mplayer", "mpv", "omx", "vlc", "iina", "smplayer", "xbmc")

NOTES = (
    "when streaming, the default output location is the temp folder",
    "when downloading, the default output location is the current directory",
    "specify <torrent-id> as a magnet uri, an http url to a .torrent file, "
    "a filesystem path to a .torrent file, or an info hash (hex string)",
)

EXAMPLES = (
    'webtorrent download "magnet:..." --vlc',
    'webtorrent "magnet:..." --vlc --player-args="--video-on-top --repeat"',
)


def summarize(result, /):
    """
    Return the command, its positionals and every option that differs from its fallback.
    """
    options = SCHEMA.options
    spec = SCHEMA.commands.get(result.command, SCHEMA.default)
    summary = {"command": result.command}
    summary |= {token.name: result[token.name] for token in spec.template}
    summary |= {
        key: result[key] for key in result.canonical
        if key in options and result[key] != options[key].fallback
    }
    players = [player for player in PLAYERS if result[player]]
    summary["player"] = players[0] if len(players) == 1 else None
    return summary


def _report(result, /):
    summary = summarize(result)
    console.print(Panel(Pretty(summary), title=result.command, title_align="left"))
    return summary


@command("download [torrent-ids...]", descr="Download a torrent", default=True)
def download(result):
    if not result["torrent-ids"]:
        return show_help(result)
    return _report(result)


@command("downloadmeta <torrent-ids...>", descr="Download metadata of torrent")
def downloadmeta(result):
    return _report(result)


@command("seed <inputs...>", descr="Seed a file or a folder")
def seed(result):
    return _report(result)


@command("create <input>", descr="Create a .torrent file")
def create(result):
    return _report(result)


@command("info <torrent-id>", descr="Show torrent information")
def info(result):
    return _report(result)


@command("version", descr="Show version information")
def version(result):
    console.print(render_version(PROG, __version__))


@command("help", descr="Show help information")
def show_help(result):
    console.print(render_help(SCHEMA, prog=PROG, notes=NOTES, examples=EXAMPLES))


SCHEMA = Schema(
    options=OPTIONS,
    commands=(download, downloadmeta, seed, create, info, version, show_help),
)


__all__ = (
    "PROG",
    "SCHEMA",
    "PLAYERS",
    "summarize",
)
