"""
Positional template matcher: resolve the command, then bind positionals to its slots.

Command resolution
- Only the first residual token can name a command (by name or alias). A match
  selects that command and drops the token; anything else resolves the schema's
  default command and keeps every token as a positional.

Binding, in order
1. each non-variadic slot takes the positional at its offset; a missing required
   slot fails, a missing optional slot is bound to None;
2. a final variadic slot takes every remaining positional as a tuple (empty only
   when the slot is optional);
3. without a variadic slot, leftover positionals fail with "too many arguments";
4. the default command with an empty template accepts no positionals at all: the
   first one is reported as an unknown command. An empty residual is valid and
   tells the caller to fall through to help.
"""
import difflib

from .faults import *
from .utils import ordinal


def resolve(residual, schema, /):
    """
    Return (command, positionals) for a residual token sequence.
    """
    if residual and (spec := schema.routes.get(residual[0])) is not None:
        return spec, tuple(residual[1:])
    return schema.default, tuple(residual)


def _missing(command, token):
    return MissingArgumentError(
        "missing required argument %r for command %r" % (token.name, command.name),
        title="missing argument",
        code=FaultCode.MISSING_ARGUMENT,
        stage="match",
        command=command.name,
        rule="required positionals must be given",
        token=token.name,
        hint="expected usage: %s" % command.usage,
        docs=getdoc(FaultCode.MISSING_ARGUMENT),
    )


def match(command, residual, schema, /):
    """
    Bind residual positionals to the command's template.

    Returns
    - dict[token name -> str | None | tuple[str, ...]] with one entry per slot.

    Raises
    - MissingArgumentError, TooManyArgumentsError, UnknownCommandError.
    """
    template = command.template
    bindings = {}

    for offset, token in enumerate(template):
        if token.variadic:
            if token.required and offset >= len(residual):
                raise _missing(command, token)
            bindings[token.name] = tuple(residual[offset:])
            return bindings
        if offset < len(residual):
            bindings[token.name] = residual[offset]
        elif token.required:
            raise _missing(command, token)
        else:
            bindings[token.name] = None

    if len(residual) <= len(template):
        return bindings

    extra = residual[len(template)]
    if not template and command is schema.default:
        suggestions = difflib.get_close_matches(extra, schema.routes.keys(), 5)
        try:
            hint = "did you mean %r? run with --help to see available commands" % suggestions[0]
        except IndexError:
            hint = "run with --help to see available commands"
        raise UnknownCommandError(
            "unknown command %r" % extra,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            stage="match",
            command=command.name,
            rule="the first positional must name a command",
            token=extra,
            suggestions=tuple(suggestions),
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        )

    raise TooManyArgumentsError(
        "too many arguments for command %r: unexpected %r as %s positional" % (
            command.name, extra, ordinal(len(template) + 1)
        ),
        title="too many arguments",
        code=FaultCode.TOO_MANY_ARGUMENTS,
        stage="match",
        command=command.name,
        rule="positionals beyond a non-variadic template are rejected",
        token=extra,
        leftover=tuple(residual[len(template):]),
        hint="remove the extra inputs; expected usage: %s" % command.usage,
        docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
    )


__all__ = (
    "resolve",
    "match",
)
