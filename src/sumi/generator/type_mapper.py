"""Map ABI parameter types to their ink! (Rust) spelling.

The generated module forwards every argument to the EVM through ``ethabi``
tokens, so each ABI type needs a Rust type with a matching ``Tokenize``
implementation in the module template.

**Mapping rules:**

* ``bool`` to ``bool``; ``string`` to ``String``; ``bytes`` to ``Vec<u8>``.
* ``address`` to ``H160`` (the template's scale-encodable 20-byte wrapper).
* ``bytesN`` to ``FixedBytes<N>``.
* ``intN`` / ``uintN`` with N in 8/16/32/64/128 to the native Rust integer;
  every other width to the 256-bit ``I256`` / ``U256`` wrappers.
* ``T[]`` to ``Vec<T>``, ``T[N]`` to ``[T; N]`` and ``(A,B)`` to ``(A, B)``,
  applied recursively.

The mapping is total over :data:`~sumi.models.ParamType`: parse errors are
raised by :func:`~sumi.parser.types.parse_type`, never here.
"""

from __future__ import annotations

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
from sumi.parser.types import parse_type


# ---------------------------------------------------------------------------
# Type mapping
# ---------------------------------------------------------------------------

_SIMPLE_MAP: dict[type, str] = {
    BoolType: "bool",
    AddressType: "H160",
    BytesType: "Vec<u8>",
    StringType: "String",
}

_NATIVE_WIDTHS = (8, 16, 32, 64, 128)


def map_type(param_type: ParamType) -> str:
    """Return the Rust type used for *param_type* in the generated module.

    Args:
        param_type: A parsed ABI type.

    Returns:
        The Rust spelling, e.g. ``"[FixedBytes<4>; 2]"`` for ``bytes4[2]``.

    Example::

        >>> map_type(ArrayType(item=UintType(bits=256)))
        'Vec<U256>'
        >>> map_type(TupleType(elements=(AddressType(), UintType(bits=64))))
        '(H160, u64)'
    """
    simple = _SIMPLE_MAP.get(type(param_type))
    if simple is not None:
        return simple

    if isinstance(param_type, FixedBytesType):
        return f"FixedBytes<{param_type.size}>"
    if isinstance(param_type, IntType):
        return _integer("i", param_type.bits)
    if isinstance(param_type, UintType):
        return _integer("u", param_type.bits)
    if isinstance(param_type, ArrayType):
        return f"Vec<{map_type(param_type.item)}>"
    if isinstance(param_type, FixedArrayType):
        return f"[{map_type(param_type.item)}; {param_type.length}]"
    if isinstance(param_type, TupleType):
        elements = [map_type(element) for element in param_type.elements]
        if len(elements) == 1:
            # Rust needs the trailing comma to spell a one-element tuple.
            return f"({elements[0]},)"
        return f"({', '.join(elements)})"

    raise TypeError(f"Unsupported ABI type: {param_type!r}")


def _integer(prefix: str, bits: int) -> str:
    if bits in _NATIVE_WIDTHS:
        return f"{prefix}{bits}"
    return f"{prefix.upper()}256"


def map_raw_type(raw: str) -> str:
    """Parse *raw* and map it in one step.

    Raises:
        MalformedTypeError: If *raw* does not match the ABI type grammar.
    """
    return map_type(parse_type(raw))
