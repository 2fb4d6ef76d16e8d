r"""
Helmsman schema model: options, positional templates, commands.

Overview
- Specs
  • OptionSpec: named option with a canonical key, an optional alias, a declared
    value type ("boolean", "string", "either", "number") and an optional default.
  • PositionalToken: one slot of a command's positional template (required or
    optional, variadic or single).
  • CommandSpec: a command name, its ordered positional template and a handler.
  • Schema: options and commands together; validated once, immutable afterwards.

- Decorators
  • @command("seed <inputs...>", ...): build a CommandSpec and bind the decorated
    function as its handler (single assignment).

Template syntax (yargs style)
- "<name>"      required single
- "[name]"      optional single
- "<name...>"   required variadic (one or more)
- "[name...]"   optional variadic (zero or more)
Only the last slot may be variadic, and once an optional slot appears no later slot
may be required. Both rules are checked at construction and raise SchemaError.

Value types
- boolean: bare flag → True; absent → False (or the declared default).
- string:  flag consumes a value; absent → None (or the declared default).
- either:  bare flag → True; flag with a value → that string; absent → False.
- number:  flag consumes an integer or decimal value; absent → None (or the default).
A boolean default forces boolean handling. Without a declared type, the type is
inferred from the default (bool → boolean, int/float → number, str → string, none → boolean).

Negated flags
- A boolean option whose key starts with "no-" (e.g. "no-quit") negates the
  un-prefixed key: "quit" defaults to True and becomes False when "--no-quit" is given.

Validation highlights
- Keys, aliases and positional names must match r"[^\W\d_](-?[^\W_]+)*".
- Every spelling (key, alias and their camelCase forms) maps to exactly one option.
- Positional names must not collide with option keys or with each other.
- Command names and aliases are unique, and at most one command is the default.

Quick example:
    >>> schema = Schema(
    ...     options=[OptionSpec("quiet", "q", descr="Don't show UI on stdout")],
    ...     commands=[CommandSpec("seed <inputs...>", descr="Seed a file or a folder")],
    ... )
    >>> schema.lookup("q").key
    'quiet'
"""
import functools
import operator
import re
from collections.abc import Iterable

from .faults import SchemaError
from .utils import *

TYPES = ("boolean", "string", "either", "number")

DEFAULT = "default"
"""Name of the implicit command resolved when no declared command is marked as default."""

_NAME = re.compile(r"[^\W\d_](-?[^\W_]+)*")
_SLOT = re.compile(r"(?P<open>[<\[])(?P<name>[^\W\d_](-?[^\W_]+)*)(?P<variadic>\.\.\.)?(?P<close>[>\]])")


class SpecType(type):
    """
    Metaclass that turns schema records into introspectable, read-only specs.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property backed
      by the private "_{name}" attribute (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics and
      rich pretty-printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in SchemaError messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, what, /):
    """
    Internal: validate a key, alias or positional name and return it trimmed.
    """
    if not isinstance(name, str):
        raise SchemaError(f"{cls.__typename__} {what} must be a string")
    elif not (name := name.strip()):
        raise SchemaError(f"{cls.__typename__} {what} cannot be empty")
    elif not _NAME.fullmatch(name):
        raise SchemaError(f"{cls.__typename__} {what} {name!r} must be letters and digits in hyphen-separated words")
    return name


def _sanitize_text(cls, metadata, name, /):
    """
    Internal: validate optional human-readable text (descr, group, placeholder).

    Unset becomes None; provided strings are trimmed and must not be empty.
    """
    if not isinstance(text := metadata[name], str | Unset):
        raise SchemaError(f"{cls.__typename__} {name!r} must be a string")
    elif isinstance(text, str) and not (text := text.strip()):
        raise SchemaError(f"{cls.__typename__} {name!r} cannot be empty")
    metadata[name] = coalesce(text)


def _sanitize_option_metadata(cls, metadata, /):
    """
    Internal: validate and normalize OptionSpec metadata in place.

    Responsibilities
    - key/alias: name grammar; the alias must differ from the key.
    - type: one of TYPES, inferred from the default when Unset; a boolean default
      forces "boolean".
    - default: must agree with the resolved type (numbers for "number", strings for
      "string", strings or booleans for "either").
    - multiple: not allowed for boolean options.
    """
    metadata["key"] = key = _sanitize_name(cls, metadata["key"], "key")

    if (alias := metadata["alias"]) is not Unset:
        metadata["alias"] = alias = _sanitize_name(cls, alias, "alias")
        if alias == key:
            raise SchemaError(f"{cls.__typename__} {key!r} alias cannot repeat its key")

    type, default = metadata["type"], metadata["default"]
    if type is not Unset and type not in TYPES:
        raise SchemaError(f"{cls.__typename__} {key!r} type must be one of {", ".join(map(repr, TYPES))}")

    if isinstance(default, bool):
        type = "boolean"
    elif type is Unset:
        match default:
            case int() | float():
                type = "number"
            case str():
                type = "string"
            case _:
                type = "boolean"
    metadata["type"] = type

    if default is not Unset and default is not None:
        match type:
            case "number" if not isinstance(default, int | float):
                raise SchemaError(f"{cls.__typename__} {key!r} number default must be an int or a float")
            case "string" if not isinstance(default, str):
                raise SchemaError(f"{cls.__typename__} {key!r} string default must be a string")
            case "either" if not isinstance(default, str | bool):
                raise SchemaError(f"{cls.__typename__} {key!r} either default must be a string or a boolean")

    if metadata["multiple"] and type == "boolean":
        raise SchemaError(f"{cls.__typename__} {key!r} boolean cannot be multiple")

    _sanitize_text(cls, metadata, "descr")
    _sanitize_text(cls, metadata, "placeholder")
    _sanitize_text(cls, metadata, "group")
    metadata["group"] = coalesce(metadata["group"], "options")


class OptionSpec(metaclass=SpecType):
    """
    Named option specification.

    Properties
    - key: canonical name; every spelling resolves to it.
    - alias: None or a single alternate spelling ("o" for "out").
    - type: "boolean" | "string" | "either" | "number".
    - default: the declared default, or Unset when none was declared.
    - descr/group/placeholder/hidden: help metadata only.
    - multiple: collect every occurrence into a tuple instead of keeping the last.
    """

    __introspectable__ = (
        "key",
        "alias",
        "type",
        "default",
        "descr",
        "group",
        "placeholder",
        "multiple",
        "hidden",
    )

    __displayable__ = (
        "key",
        "alias",
        "type",
        "default",
    )

    def __new__(
            cls,
            key,
            alias=Unset,
            /,
            type=Unset,
            default=Unset,
            descr=Unset,
            *,
            group=Unset,
            placeholder=Unset,
            multiple=False,
            hidden=False,
    ):
        metadata = {
            "key": key,
            "alias": alias,
            "type": type,
            "default": default,
            "descr": descr,
            "group": group,
            "placeholder": placeholder,
            "multiple": bool(multiple),
            "hidden": bool(hidden),
        }
        _sanitize_option_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        # None reads better than Unset for a missing alias; the default keeps Unset.
        self._alias = coalesce(self._alias)
        return self

    @property
    def spellings(self):
        """
        Every accepted spelling: key, alias and their camelCase forms (deduplicated, ordered).
        """
        spellings = [self.key, camelize(self.key)]
        if self.alias:
            spellings += [self.alias, camelize(self.alias)]
        return tuple(dict.fromkeys(spellings))

    @property
    def negates(self):
        """
        The key this option negates ("quit" for "no-quit"), or None.
        """
        if self.type == "boolean" and self.key.startswith("no-") and len(self.key) > 3:
            return self.key[3:]
        return None

    @property
    def fallback(self):
        """
        The value an absent option resolves to: its default, else () when multiple, else False or None by type.
        """
        if self.multiple:
            return coalesce(self.default, ())
        return coalesce(self.default, False if self.type in ("boolean", "either") else None)


class PositionalToken(metaclass=SpecType):
    """
    One slot of a command's positional template.
    """

    __introspectable__ = (
        "name",
        "required",
        "variadic",
    )

    def __new__(cls, name, /, required=True, variadic=False):
        self = super().__new__(cls)
        self._name = _sanitize_name(cls, name, "name")
        self._required = bool(required)
        self._variadic = bool(variadic)
        return self

    def __str__(self):
        body = self.name + "..." * self.variadic
        return f"<{body}>" if self.required else f"[{body}]"


def _parse_usage(cls, usage, /):
    """
    Internal: split a yargs-style usage string into (name, tokens).

    "seed <inputs...>" → ("seed", (PositionalToken("inputs", variadic=True),))
    """
    if not isinstance(usage, str):
        raise SchemaError(f"{cls.__typename__} usage must be a string")
    elif not (words := usage.split()):
        raise SchemaError(f"{cls.__typename__} usage cannot be empty")

    name = _sanitize_name(cls, words[0], "name")
    tokens = []
    for word in words[1:]:
        if not (match := _SLOT.fullmatch(word)) or (match["open"], match["close"]) not in (("<", ">"), ("[", "]")):
            raise SchemaError(f"{cls.__typename__} {name!r} has an unparsable template slot {word!r}")
        tokens.append(PositionalToken(match["name"], required=match["open"] == "<", variadic=bool(match["variadic"])))
    return name, tuple(tokens)


def _sanitize_template(cls, name, tokens, /):
    """
    Internal: enforce the template ordering invariants.

    - only the last token may be variadic;
    - no required token may follow an optional one;
    - token names are unique within the command.
    """
    seen = set()
    optional = None
    for index, token in enumerate(tokens):
        if not isinstance(token, PositionalToken):
            raise SchemaError(f"{cls.__typename__} {name!r} template must contain positional tokens")
        if token.name in seen:
            raise SchemaError(f"{cls.__typename__} {name!r} positional {token.name!r} is declared twice")
        seen.add(token.name)
        if token.variadic and index != len(tokens) - 1:
            raise SchemaError(f"{cls.__typename__} {name!r} variadic positional {token.name!r} must be the last one")
        if optional and token.required:
            raise SchemaError(f"{cls.__typename__} {name!r} required positional {token.name!r} cannot follow optional {optional!r}")
        if not token.required:
            optional = optional or token.name


class CommandSpec(metaclass=SpecType):
    """
    Command specification: a name, an ordered positional template and a handler.

    Construction
    - CommandSpec("seed <inputs...>", handler, "Seed a file or a folder")
    - CommandSpec("seed", template=[PositionalToken("inputs", variadic=True)])

    Calling a CommandSpec forwards the ParseResult to its handler; without a
    handler the call is a no-op returning None.
    """

    __introspectable__ = (
        "name",
        "template",
        "descr",
        "aliases",
        "default",
        "hidden",
    )

    def __new__(
            cls,
            usage,
            /,
            handler=Unset,
            descr=Unset,
            *,
            template=Unset,
            aliases=(),
            default=False,
            hidden=False,
    ):
        name, tokens = _parse_usage(cls, usage)
        if template is not Unset:
            if tokens:
                raise SchemaError(f"{cls.__typename__} {name!r} cannot take both a usage template and a template")
            if not isinstance(template, Iterable):
                raise SchemaError(f"{cls.__typename__} {name!r} template must be iterable")
            tokens = tuple(template)
        _sanitize_template(cls, name, tokens)

        if handler is not Unset and not callable(handler):
            raise SchemaError(f"{cls.__typename__} {name!r} handler must be callable")
        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise SchemaError(f"{cls.__typename__} {name!r} aliases must be an iterable of strings")

        metadata = {
            "name": name,
            "template": tokens,
            "descr": descr,
            "aliases": tuple(_sanitize_name(cls, alias, "alias") for alias in aliases),
            "default": bool(default),
            "hidden": bool(hidden),
        }
        _sanitize_text(cls, metadata, "descr")

        self = super().__new__(cls)
        for key, object in metadata.items():
            setattr(self, "_" + key, object)
        self._handler = handler
        return self

    @property
    def handler(self):
        return coalesce(self._handler)

    @property
    def usage(self):
        """
        The yargs-style usage string rebuilt from the template.
        """
        return " ".join([self.name, *map(str, self.template)])

    def __call__(self, result, /):
        if self._handler is Unset:
            return None
        return self._handler(result)


def command(usage, /, *args, **kwargs):
    """
    Decorator/factory for defining a command with a bound handler.

    Usage
        @command("seed <inputs...>", descr="Seed a file or a folder")
        def seed(result): ...

    Behavior
    - Validates that it decorates a callable and enforces single application.
    - Returns the configured CommandSpec, which forwards calls to the handler.
    """
    spec = CommandSpec(usage, *args, **kwargs)

    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        if spec._handler is not Unset:
            raise TypeError("@command() must be applied only once")
        spec._handler = handler
        return spec

    wrapper.__name__ = wrapper.__qualname__ = "command"
    return wrapper


class Schema(metaclass=SpecType):
    """
    Options and commands for one tool, validated once and read-only afterwards.

    Properties
    - options:  mapping[key -> OptionSpec] in declaration order.
    - switches: mapping[spelling -> OptionSpec] (key, alias, camelCase forms).
    - commands: mapping[name -> CommandSpec] in declaration order.
    - routes:   mapping[name or alias -> CommandSpec].
    - default:  the CommandSpec resolved when the first positional is not a command.
    - groups:   mapping[group -> tuple[OptionSpec, ...]] for help rendering.
    """

    __introspectable__ = (
        "options",
        "switches",
        "commands",
        "routes",
        "default",
        "groups",
    )

    __displayable__ = (
        "options",
        "commands",
        "default",
    )

    def __new__(cls, options=(), commands=()):
        self = super().__new__(cls)
        self._options = {}
        self._switches = {}
        self._commands = {}
        self._routes = {}
        self._groups = {}

        for option in options:
            if not isinstance(option, OptionSpec):
                raise SchemaError(f"{cls.__typename__} options must be option specs")
            if option.key in self._options:
                raise SchemaError(f"{cls.__typename__} option key {option.key!r} is declared twice")
            for spelling in option.spellings:
                if (owner := self._switches.setdefault(spelling, option)) is not option:
                    raise SchemaError(f"{cls.__typename__} spelling {spelling!r} of {option.key!r} is already used by {owner.key!r}")
            self._options[option.key] = option
            self._groups.setdefault(option.group, []).append(option)

        # keys present in every result: options, negation targets and their camelCase mirrors
        fields = {}
        for option in self._options.values():
            if (negated := option.negates) and (target := self._options.get(negated)) and target.type != "boolean":
                raise SchemaError(f"{cls.__typename__} option {negated!r} negated by {option.key!r} must be boolean")
            for key in filter(None, (option.key, negated)):
                for spelling in dict.fromkeys((key, camelize(key))):
                    if fields.setdefault(spelling, key) != key:
                        raise SchemaError(f"{cls.__typename__} result key {spelling!r} is produced by both {fields[spelling]!r} and {key!r}")

        default = None
        for spec in commands:
            if not isinstance(spec, CommandSpec):
                raise SchemaError(f"{cls.__typename__} commands must be command specs")
            for route in (spec.name, *spec.aliases):
                if (owner := self._routes.setdefault(route, spec)) is not spec:
                    raise SchemaError(f"{cls.__typename__} command route {route!r} is already used by {owner.name!r}")
            self._commands[spec.name] = spec
            if spec.default:
                if default:
                    raise SchemaError(f"{cls.__typename__} commands {default.name!r} and {spec.name!r} cannot both be default")
                default = spec
            for token in spec.template:
                for spelling in dict.fromkeys((token.name, camelize(token.name))):
                    if spelling in fields:
                        raise SchemaError(f"{cls.__typename__} command {spec.name!r} positional {token.name!r} collides with option {fields[spelling]!r}")

        self._groups = {group: tuple(members) for group, members in self._groups.items()}
        self._default = default or CommandSpec(DEFAULT)
        return self

    def lookup(self, spelling, /):
        """
        Return the OptionSpec for a spelling (key, alias or camelCase form), or None.
        """
        return self._switches.get(spelling)


__all__ = (
    # Constants
    "TYPES",
    "DEFAULT",

    # Classes (specifications)
    "OptionSpec",
    "PositionalToken",
    "CommandSpec",
    "Schema",

    # Decorators
    "command",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del SpecType
