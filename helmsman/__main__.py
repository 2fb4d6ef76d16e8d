"""
Command-line entry point: ``python -m helmsman ARGS...``.

Runs the torrent tool schema over the given arguments:
- --help/-h (or the help command, or a download with nothing to download) shows help;
- --version/-v (or the version command) shows the version line;
- a usage fault is rendered to stderr and the process exits with status 1;
- anything else is dispatched to the command's handler.

The help and version flags take priority over positional faults: ``info --help``
shows help instead of reporting the missing torrent id. Flag faults (an unknown
option, a missing value) are still reported.
"""
import sys

from .engine import dispatch, parse
from .faults import UsageError, trigger
from .torrent import PROG, SCHEMA, show_help, version
from .utils import Unset

__prog__ = PROG


def main(argv=Unset, /, *, colorful=True, fancy=False):
    result = parse(sys.argv[1:] if argv is Unset else argv, SCHEMA)
    if isinstance(result, UsageError):
        values = result.options.get("values", {})
    else:
        values = result
    if values.get("help"):
        return show_help(result)
    if values.get("version"):
        return version(result)
    if isinstance(result, UsageError):
        trigger(result, shell=True, prog=PROG, colorful=colorful, fancy=fancy)
    return dispatch(result, SCHEMA)


if __name__ == "__main__":
    main()
