"""
Helmsman engine: parse raw arguments against a schema, then dispatch.

Pipeline
    RawArgs → Tokenized → Normalized → CommandResolved → PositionalsBound → Assembled

Each stage is a plain function over values; nothing is kept between calls, so a
schema can be shared freely. The first UsageError ends the parse and is returned,
never raised, to the caller.

Quick start
    from helmsman import Schema, OptionSpec, CommandSpec, parse

    schema = Schema(
        options=[OptionSpec("quiet", "q")],
        commands=[CommandSpec("seed <inputs...>")],
    )
    result = parse(["seed", "fileA", "fileB", "-q"], schema)
    result.command          # "seed"
    result["inputs"]        # ("fileA", "fileB")
    result["quiet"]         # True
"""
import copy
import shlex
import sys
from collections.abc import Iterable
from types import MappingProxyType

from .assembler import assemble
from .faults import *
from .matcher import match, resolve
from .normalizer import normalize
from .tokenizer import tokenize
from .utils import Unset


def _arguments(args):
    """
    Normalize the accepted argument shapes into a tuple of strings.

    - str: split shell-style (shlex.split).
    - Iterable[str]: used as-is, item by item.
    """
    if isinstance(args, str):
        return tuple(shlex.split(args))
    if not isinstance(args, Iterable):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    arguments = tuple(args)
    if not all(isinstance(argument, str) for argument in arguments):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    return arguments


def parse(args, schema, /):
    """
    Parse raw arguments into a ParseResult, or return the UsageError that stopped it.

    Parameters
    - args: the process arguments without the program name, as an iterable of
      strings or a single shell-like string.
    - schema: a Schema.

    Returns
    - ParseResult on success.
    - UsageError (not raised) for any user input error. Faults from positional
      matching carry the resolved options under the "values" option.

    Raises
    - TypeError for arguments that are not strings (a programming error).
    """
    arguments = _arguments(args)
    try:
        flags, residual = tokenize(arguments, schema)
        options = normalize(flags, schema)
    except UsageError as error:
        return error
    try:
        command, positionals = resolve(residual, schema)
        bindings = match(command, positionals, schema)
    except UsageError as error:
        # positional faults carry the options resolved before them
        return copy.replace(error, values=MappingProxyType(options))
    return assemble(command, options, bindings)


def dispatch(result, schema, /):
    """
    Hand a ParseResult to its command's handler and return what the handler returns.

    A command without a handler is a no-op returning None.
    """
    spec = schema.commands.get(result.command)
    if spec is None:
        spec = schema.default
    return spec(result)


def invoke(schema, args=Unset, /, **options):
    """
    Convenience runner: parse, surface any fault, dispatch.

    Parameters
    - args: Unset reads sys.argv[1:]; otherwise as for parse().
    - options: forwarded to trigger() for faults (shell, colorful, fancy, prog).
      With shell=True a fault is printed and the process exits with status 1.
    """
    result = parse(sys.argv[1:] if args is Unset else args, schema)
    if isinstance(result, UsageError):
        trigger(result, **options)
        return None
    return dispatch(result, schema)


__all__ = (
    "parse",
    "dispatch",
    "invoke",
)
