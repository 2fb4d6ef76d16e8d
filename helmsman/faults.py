"""
Helmsman faults (schema and usage errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing usage error.
  Codes are grouped by parse stage to keep copy consistent and logs searchable.
- SchemaError: programmer/configuration error detected while a Schema is built
  (bad token ordering, duplicate alias, unparsable template). Always fatal.
- UsageError: user input error. Carries a message plus structured options
  (code, title, hint, command, rule, token, stage) and knows how to render itself.
- trigger(): central entry point to surface a usage error (print-and-exit in shell
  mode, raise otherwise).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: flag and argument messages include the ordinal position
  of the offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The engine never raises a UsageError past parse(); it returns it.
- The CLI calls trigger(fault, shell=True, ...) to render the fault via rich and exit 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by parse stage)
    - tokenize (2111x)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED, EMPTY_VALUE, INVALID_NUMBER
    - match (2112x)
      • UNKNOWN_COMMAND, MISSING_ARGUMENT, TOO_MANY_ARGUMENTS

    normalize() allows a host to remap codes to custom labels while keeping them stable.
    """
    # --- tokenize errors (2111x) ---
    UNKNOWN_SWITCH              = 21111
    FLAG_ASSIGNMENT             = 21112
    OPTION_VALUE_REQUIRED       = 21113
    EMPTY_VALUE                 = 21114
    INVALID_NUMBER              = 21115

    # --- match errors (2112x) ---
    UNKNOWN_COMMAND             = 21121
    MISSING_ARGUMENT            = 21122
    TOO_MANY_ARGUMENTS          = 21123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SchemaError(Exception):
    """
    Raised while building a schema that violates its own invariants.

    Never produced by end-user input: a SchemaError means the tool itself is
    misconfigured and should fail at startup.
    """


class UsageError(Exception):
    """
    Structured user input error.

    The message is a single lowercased sentence; everything else lives in the
    read-only `options` mapping and is reachable through the properties below.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        message = coalesce(message, "")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def command(self):
        return self.options.get("command")

    @property
    def rule(self):
        return self.options.get("rule")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def stage(self):
        return self.options.get("stage")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "helmsman")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", "usage error")).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


# tokenize stage
class UnknownSwitchError(UsageError): ...
class FlagAssignmentError(UsageError): ...
class OptionValueRequiredError(UsageError): ...
class EmptyValueError(UsageError): ...
class InvalidNumberError(UsageError): ...

# match stage
class UnknownCommandError(UsageError): ...
class MissingArgumentError(UsageError): ...
class TooManyArgumentsError(UsageError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see UsageError).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, the fault is printed to stderr via rich and the process exits with 1;
      otherwise it is raised.

    typical options
    - shell, fancy, colorful, prog.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "SchemaError",
    "UsageError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "EmptyValueError",
    "InvalidNumberError",
    "UnknownCommandError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "FaultCode",
    "trigger",
    "getdoc",
)
