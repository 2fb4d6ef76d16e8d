"""
Helmsman utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the schema, the parse stages and the renderers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr), with containers
    frozen (tuple / MappingProxyType / frozenset) so public state cannot be mutated.

- camelize(key)
  • "player-args" → "playerArgs"; keys without hyphens are returned unchanged.

- ordinal(number)
  • 1 → "first", 11 → "11th", 22 → "22nd"; used to lead messages with a position.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> camelize("torrent-ids")
    'torrentIds'
    >>> ordinal(3)
    'third'
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used where None is a legitimate user value (an option default of None, an
    unbound optional positional) but the API still needs to tell “not provided”
    apart from “provided as None”.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations and isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "", or () are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def _freeze(object):
    """
    Shallow freeze of common containers.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType over a copy
    - Set → frozenset
    - Anything else → unchanged
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance and hands back a frozen view of
    containers, so specs stay immutable once constructed.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


@functools.cache
def camelize(key, /):
    """
    Return the camelCase spelling of a hyphenated key.

    Only hyphens separate words; the first segment is kept as written and each
    following segment gets its first character upper-cased.

    Examples
    - camelize("player-args")  -> "playerArgs"
    - camelize("not-on-top")   -> "notOnTop"
    - camelize("quiet")        -> "quiet"
    """
    if not isinstance(key, str):
        raise TypeError("camelize() argument must be a string")
    return re.sub(r"-+(.)", lambda match: match[1].upper(), key)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes (11th, 21st, 112th).
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1] if number > 0 else f"{number}th"
    except IndexError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Singleton, falsey, and distinct from None; materialize it with coalesce().
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "camelize",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
