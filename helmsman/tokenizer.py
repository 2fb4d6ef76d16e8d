"""
Flag tokenizer: split raw arguments into flag occurrences and residual positionals.

Forms
- "--name" / "--name=value": any spelling (key, alias, camelCase form).
- "-x" / "-x=value": single-character spellings.
- "-qv": a cluster of single-character spellings; booleans are set in turn and the
  first value-taking member takes the rest of the cluster ("-p8000") or the next
  token as its value.
- "--": ends flag parsing; everything after it is positional.
- "-" and negative numbers ("-5") are plain tokens, never flags.

Values by type
- boolean: True, consuming nothing; an inline "=true"/"=false" is accepted.
- string/number: the inline value or the next token, which must not itself be a flag.
- either: the inline value or the next non-flag token; otherwise "" (coerced to True later).

The tokenizer is a pure function of its inputs: it reads the schema, never writes it.
"""
import difflib
import re
from collections import deque

from .faults import *
from .utils import ordinal

_LONG = re.compile(r"--(?P<name>[^=]+)(=(?P<value>.*))?", re.DOTALL)
_SHORT = re.compile(r"-(?P<cluster>[^=\-][^=]*)(=(?P<value>.*))?", re.DOTALL)
_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _is_flag(token):
    """
    True when the token would be read as a flag (or the "--" terminator).
    """
    return token.startswith("-") and len(token) > 1 and not _NUMBER.fullmatch(token)


def _dashed(spelling):
    return ("-" if len(spelling) == 1 else "--") + spelling


def _number(option, spelling, text, index):
    """
    Convert a number option value, keeping integers as int.
    """
    if _NUMBER.fullmatch(text := text.strip()):
        try:
            return int(text)
        except ValueError:
            return float(text)
    raise InvalidNumberError(
        "option %r at %s position expects a number, got %r" % (_dashed(spelling), ordinal(index), text),
        title="invalid number",
        code=FaultCode.INVALID_NUMBER,
        stage="tokenize",
        rule="number options take an integer or a decimal value",
        token=text,
        index=index,
        hint="pass a numeric value (for example: %s 8000)" % _dashed(spelling),
        docs=getdoc(FaultCode.INVALID_NUMBER),
    )


def _unknown(schema, spelling, index):
    suggestions = difflib.get_close_matches(spelling, schema.switches.keys(), 5)
    try:
        hint = "did you mean %r? run with --help to see all options" % _dashed(suggestions[0])
    except IndexError:
        hint = "run with --help to see all available options"
    return UnknownSwitchError(
        "unknown option %r at %s position" % (_dashed(spelling), ordinal(index)),
        title="unknown option",
        code=FaultCode.UNKNOWN_SWITCH,
        stage="tokenize",
        rule="every flag must be declared",
        token=_dashed(spelling),
        index=index,
        suggestions=tuple(map(_dashed, suggestions)),
        hint=hint,
        docs=getdoc(FaultCode.UNKNOWN_SWITCH),
    )


def _value(option, spelling, inline, tokens, index):
    """
    Read the value for one flag occurrence.

    Returns (value, consumed) where consumed tells whether the next token was taken.
    """
    if option.type == "boolean":
        if inline is None:
            return True, False
        if inline.strip().lower() in ("true", "false"):
            return inline.strip().lower() == "true", False
        raise FlagAssignmentError(
            "boolean option %r at %s position cannot take the value %r" % (_dashed(spelling), ordinal(index), inline),
            title="flag cannot take a value",
            code=FaultCode.FLAG_ASSIGNMENT,
            stage="tokenize",
            rule="boolean options take no value (or an inline true/false)",
            token=_dashed(spelling),
            index=index,
            hint="remove everything from '=' (for example: %s)" % _dashed(spelling),
            docs=getdoc(FaultCode.FLAG_ASSIGNMENT),
        )

    if inline is not None:
        if not inline and option.type != "either":
            raise EmptyValueError(
                "empty inline value for option %r at %s position" % (_dashed(spelling), ordinal(index)),
                title="empty value",
                code=FaultCode.EMPTY_VALUE,
                stage="tokenize",
                rule="value options need a non-empty value",
                token=_dashed(spelling),
                index=index,
                hint="add a value after '=' (for example: %s=<value>)" % _dashed(spelling),
                docs=getdoc(FaultCode.EMPTY_VALUE),
            )
        value, consumed = inline, False
    elif tokens and not _is_flag(tokens[0]):
        value, consumed = tokens[0], True
    elif option.type == "either":
        return "", False
    else:
        raise OptionValueRequiredError(
            "option %r at %s position requires a value" % (_dashed(spelling), ordinal(index)),
            title="missing option value",
            code=FaultCode.OPTION_VALUE_REQUIRED,
            stage="tokenize",
            rule="value options consume the following argument",
            token=_dashed(spelling),
            index=index,
            hint="pass a value after a space (for example: %s <value>) or inline (%s=<value>)" % (
                _dashed(spelling), _dashed(spelling)
            ),
            docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED),
        )

    if option.type == "number":
        value = _number(option, spelling, value, index + consumed)
    return value, consumed


def tokenize(args, schema, /):
    """
    Split raw arguments into flag occurrences and residual positionals.

    Parameters
    - args: sequence of argument strings (without the program name).
    - schema: the Schema whose options decide which flags take values.

    Returns
    - flags: dict[canonical key -> list[raw value]]; every spelling of an option
      (key, alias or camelCase form) feeds the same list, in argument order.
    - residual: tuple[str, ...] of tokens not consumed as flags or flag values.

    Raises
    - UsageError subclasses for unknown flags, missing or malformed values.
    """
    flags = {}
    residual = []
    tokens = deque(args)
    index = 0

    while tokens:
        token = tokens.popleft()
        index += 1

        if token == "--":
            residual.extend(tokens)
            break

        if not _is_flag(token):
            residual.append(token)
            continue

        if match := _LONG.fullmatch(token):
            members = [(match["name"], match["value"])]
        elif match := _SHORT.fullmatch(token):
            cluster = match["cluster"]
            members = [(char, None) for char in cluster[:-1]] + [(cluster[-1], match["value"])]
        else:
            raise _unknown(schema, token.lstrip("-"), index)

        start = index
        for position, (spelling, inline) in enumerate(members):
            if (option := schema.lookup(spelling)) is None:
                raise _unknown(schema, spelling, start)

            last = position == len(members) - 1
            if not last and option.type != "boolean":
                # "-p8000": the rest of the cluster is this member's value
                rest = "".join(char for char, _ in members[position + 1:])
                if match["value"] is not None:
                    rest += "=" + match["value"]
                value, _ = _value(option, spelling, rest, tokens, start)
                flags.setdefault(option.key, []).append(value)
                break

            value, consumed = _value(option, spelling, inline, tokens, start)
            if consumed:
                tokens.popleft()
                index += 1
            flags.setdefault(option.key, []).append(value)

    return flags, tuple(residual)


__all__ = (
    "tokenize",
)
