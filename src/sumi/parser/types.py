"""Parse textual ABI types into :data:`~sumi.models.ParamType` values.

The accepted grammar is the Solidity ABI type grammar restricted to the
value types a wrapper can forward::

    type       := elementary | type "[" "]" | type "[" length "]" | tuple
    tuple      := "(" type ("," type)* ")"
    elementary := "bool" | "address" | "string" | "bytes"
                | "bytes" N        (1 <= N <= 32)
                | "int" [M] | "uint" [M]   (M multiple of 8, 8 <= M <= 256)
    length     := positive decimal integer without leading zeros

Anything else raises :class:`~sumi.exceptions.MalformedTypeError` carrying
the offending text -- the parser never falls back to a default type.

JSON ABIs spell struct parameters as ``"type": "tuple"`` (optionally with
array suffixes) plus a ``components`` list. :func:`expand_tuple_type`
rewrites those into the parenthesised form before parsing, so the rest of
the pipeline only ever sees canonical text such as ``(address,uint256)[]``.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from sumi.exceptions import InvalidInterfaceError, MalformedTypeError
from sumi.models import (
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedArrayType,
    FixedBytesType,
    IntType,
    ParamType,
    StringType,
    TupleType,
    UintType,
)


_INTEGER_RE = re.compile(r"(u?int)([0-9]*)")
_FIXED_BYTES_RE = re.compile(r"bytes([0-9]+)")
_LENGTH_RE = re.compile(r"[1-9][0-9]*")

# Array dimensions and tuple levels combined.
_MAX_NESTING = 32

_SIMPLE_TYPES: dict[str, ParamType] = {
    "bool": BoolType(),
    "address": AddressType(),
    "bytes": BytesType(),
    "string": StringType(),
}


def parse_type(raw: str) -> ParamType:
    """Parse a raw ABI type string.

    Args:
        raw: Type text exactly as it appears in the interface description,
            e.g. ``"uint256"``, ``"address[]"``, ``"(bool,bytes32)[4]"``.

    Returns:
        The equivalent :data:`~sumi.models.ParamType`.

    Raises:
        MalformedTypeError: If *raw* does not match the grammar or nests
            arrays and tuples more than 32 levels deep.

    Example::

        >>> parse_type("uint8[2][]")
        ArrayType(kind='array', item=FixedArrayType(kind='fixed_array', item=UintType(kind='uint', bits=8), length=2))
    """
    return _parse(raw, raw, 0)


def _parse(text: str, raw: str, depth: int) -> ParamType:
    if not text:
        raise MalformedTypeError(raw, "empty type")

    if text.endswith("]") or text.startswith("("):
        if depth >= _MAX_NESTING:
            raise MalformedTypeError(raw, f"nested more than {_MAX_NESTING} levels deep")
        if text.endswith("]"):
            return _parse_array(text, raw, depth + 1)
        return _parse_tuple(text, raw, depth + 1)

    simple = _SIMPLE_TYPES.get(text)
    if simple is not None:
        return simple

    match = _INTEGER_RE.fullmatch(text)
    if match is not None:
        return _parse_integer(match.group(1), match.group(2), raw)

    match = _FIXED_BYTES_RE.fullmatch(text)
    if match is not None:
        size = match.group(1)
        if size.startswith("0") or not 1 <= int(size) <= 32:
            raise MalformedTypeError(raw, f"fixed bytes size must be 1..32, got {size!r}")
        return FixedBytesType(size=int(size))

    if any(ch in text for ch in "[]()"):
        raise MalformedTypeError(raw, "unbalanced brackets")
    raise MalformedTypeError(raw, f"unknown type {text!r}")


def _parse_array(text: str, raw: str, depth: int) -> ParamType:
    """Parse ``T[]`` / ``T[N]``; the last bracket pair is the outermost dimension."""
    open_idx = text.rfind("[")
    if open_idx <= 0:
        raise MalformedTypeError(raw, "unbalanced brackets")

    length = text[open_idx + 1 : -1]
    item = _parse(text[:open_idx], raw, depth)
    if not length:
        return ArrayType(item=item)
    if not _LENGTH_RE.fullmatch(length):
        raise MalformedTypeError(raw, f"invalid array length {length!r}")
    return FixedArrayType(item=item, length=int(length))


def _parse_tuple(text: str, raw: str, depth: int) -> ParamType:
    if not text.endswith(")"):
        raise MalformedTypeError(raw, "unbalanced parentheses")
    parts = _split_top_level(text[1:-1], raw)
    return TupleType(elements=tuple(_parse(part, raw, depth) for part in parts))


def _split_top_level(body: str, raw: str) -> list[str]:
    """Split a tuple body on commas that are not nested in parentheses."""
    parts: list[str] = []
    depth = 0
    start = 0
    for idx, ch in enumerate(body):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise MalformedTypeError(raw, "unbalanced parentheses")
        elif ch == "," and depth == 0:
            parts.append(body[start:idx])
            start = idx + 1
    if depth != 0:
        raise MalformedTypeError(raw, "unbalanced parentheses")
    parts.append(body[start:])

    if parts == [""]:
        raise MalformedTypeError(raw, "empty tuple")
    if any(not part for part in parts):
        raise MalformedTypeError(raw, "empty tuple element")
    return parts


def _parse_integer(prefix: str, width: str, raw: str) -> ParamType:
    bits = 256
    if width:
        if width.startswith("0") or int(width) % 8 != 0 or not 8 <= int(width) <= 256:
            raise MalformedTypeError(
                raw, f"integer width must be a multiple of 8 in 8..256, got {width!r}"
            )
        bits = int(width)
    if prefix == "uint":
        return UintType(bits=bits)
    return IntType(bits=bits)


# ---------------------------------------------------------------------------
# JSON tuple components
# ---------------------------------------------------------------------------


def expand_tuple_type(param: Mapping[str, Any]) -> str:
    """Return the canonical type text of an ABI parameter object.

    Plain types are returned unchanged. ``tuple`` types (with any array
    suffix) are rewritten from their ``components`` recursively::

        {"type": "tuple[]", "components": [{"type": "address"}, {"type": "uint256"}]}
        -> "(address,uint256)[]"

    Args:
        param: A parameter object from an ABI ``inputs`` list.

    Returns:
        The type text used for both type mapping and the selector signature.

    Raises:
        InvalidInterfaceError: If ``type`` is not a string or a component is
            not an object.
        MalformedTypeError: If a ``tuple`` type has no ``components`` list.
    """
    raw_type = param.get("type")
    if not isinstance(raw_type, str):
        raise InvalidInterfaceError(f"Parameter type must be a string, got {raw_type!r}")
    if not raw_type.startswith("tuple"):
        return raw_type

    components = param.get("components")
    if not isinstance(components, list) or not components:
        raise MalformedTypeError(raw_type, "tuple type without components")

    inner: list[str] = []
    for component in components:
        if not isinstance(component, dict):
            raise InvalidInterfaceError(
                f"Tuple component must be an object, got {type(component).__name__}"
            )
        inner.append(expand_tuple_type(component))
    return f"({','.join(inner)}){raw_type[len('tuple'):]}"
