"""
Alias & type normalizer: rewrite tokenizer output into canonical option values.

Rules
- every spelling resolves to its option's canonical key;
- list values are raw occurrences: the last one wins, or all of them are kept as a
  tuple for options declared `multiple`;
- "either" options present with an empty value become True;
- every declared option is present in the output, using its fallback when absent
  (the declared default, else False for boolean/either and None for string/number);
- a declared boolean "no-X" sets X to the opposite of itself; without "--no-X",
  X keeps its own value when given and defaults to True otherwise.

Non-list values are taken as already resolved, which makes normalizing a
normalized mapping a no-op.
"""
from .faults import SchemaError


def _coerce(option, value):
    if option.type == "either" and value == "":
        return True
    return value


def _collapse(option, occurrences):
    values = tuple(_coerce(option, value) for value in occurrences)
    if option.multiple:
        return values
    return values[-1] if values else option.fallback


def normalize(flags, schema, /):
    """
    Return a dict[canonical key -> value] covering every option of the schema.

    Parameters
    - flags: mapping produced by tokenize() (canonical key -> occurrences in argument
      order), or a mapping previously returned by normalize(). Any spelling is
      accepted as a key; lists under different spellings of one option are merged
      in mapping order.
    - schema: the Schema the flags were tokenized against.

    Raises
    - SchemaError: when a key is unknown to the schema, meaning the mapping was not
      produced from this schema. User input never reaches this path.
    """
    negators = {option.negates: option for option in schema.options.values() if option.negates}

    options = {}
    provided = {}
    for spelling, value in flags.items():
        if (option := schema.lookup(spelling)) is None:
            if spelling in negators:
                # derived key from an earlier normalization, recomputed below
                provided[spelling] = value
                continue
            raise SchemaError(f"normalize() key {spelling!r} is not declared in the schema")

        value = _collapse(option, value) if isinstance(value, list) else _coerce(option, value)
        if option.multiple and isinstance(options.get(option.key), tuple) and isinstance(value, tuple):
            value = options[option.key] + value
        options[option.key] = provided[option.key] = value

    normalized = {key: options.get(key, option.fallback) for key, option in schema.options.items()}

    for key, negator in negators.items():
        if normalized[negator.key]:
            normalized[key] = False
        else:
            normalized[key] = provided.get(key, True)

    return normalized


__all__ = (
    "normalize",
)
