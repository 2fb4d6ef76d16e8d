"""
Result assembler: merge option values and positional bindings into a ParseResult.
"""
import itertools
from collections.abc import Mapping
from types import MappingProxyType

from .utils import camelize


class ParseResult(Mapping):
    """
    Immutable record of one parse.

    - Mapping access by canonical key ("player-args", "torrent-ids") or by its
      camelCase mirror ("playerArgs", "torrentIds"); both read the same value.
    - `command` is the resolved command name.
    - `canonical` lists the keys without their camelCase mirrors, in order.

    Two results are equal when their commands and fields are equal.
    """

    __slots__ = ("_command", "_fields", "_canonical")

    def __init__(self, command, fields, canonical=None, /):
        self._command = command
        self._fields = MappingProxyType(dict(fields))
        self._canonical = tuple(canonical if canonical is not None else self._fields)

    @property
    def command(self):
        return self._command

    @property
    def canonical(self):
        return self._canonical

    def __getitem__(self, key):
        return self._fields[key]

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __eq__(self, other):
        if isinstance(other, ParseResult):
            return self._command == other._command and self._fields == other._fields
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "command", self._command
        for key in self._canonical:
            yield key, self._fields[key]


def assemble(command, options, positionals, /):
    """
    Build the ParseResult for a resolved command.

    Every hyphenated key also gets its camelCase mirror. Schema validation has
    already ruled out collisions between keys and mirrors, so this cannot fail.
    """
    fields = {}
    for key, value in itertools.chain(options.items(), positionals.items()):
        fields[key] = value
    canonical = tuple(fields)
    for key in canonical:
        fields.setdefault(camelize(key), fields[key])
    return ParseResult(command.name, fields, canonical)


__all__ = (
    "ParseResult",
    "assemble",
)
