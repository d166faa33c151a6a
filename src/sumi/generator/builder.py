"""Build the generator model from a decoded ABI.

:func:`build_module` walks the ABI entries once, top to bottom, and turns
every qualifying entry into a :class:`~sumi.models.Function`. The wrapper
shape produced by the template is fixed -- a message that sends the call
and reports success as ``bool`` -- so only a subset of the ABI qualifies:

1. the entry's ``type`` is ``"function"``;
2. its ``stateMutability`` is not ``"view"``;
3. every declared output is ``bool``.

Entries failing a rule are skipped, not rejected. :func:`exclusion_reason`
exposes the same decision for a single entry so the ``inspect skipped``
command can explain it.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Optional

from sumi.exceptions import InvalidInterfaceError, MalformedTypeError
from sumi.generator.selector import encode_selector
from sumi.generator.type_mapper import map_raw_type
from sumi.models import Function, Input, Module
from sumi.parser.types import expand_tuple_type

logger = logging.getLogger(__name__)

BOOL_OUTPUT = "bool"
"""The only return type the generated wrapper supports."""


def build_module(entries: Any, module_name: str, evm_identifier: str) -> Module:
    """Build a :class:`~sumi.models.Module` from decoded ABI entries.

    Args:
        entries: The decoded interface document. Must be a list of objects.
        module_name: Name of the ink! module to generate, used verbatim.
        evm_identifier: EVM id literal embedded verbatim in the module.

    Returns:
        A module whose functions appear in the same order as their entries.

    Raises:
        InvalidInterfaceError: If *entries* is not a list of objects, or a
            qualifying entry lacks a name or has malformed inputs.
        MalformedTypeError: If an input type is outside the ABI grammar. The
            error names the entry index, function, and input.
    """
    if not isinstance(entries, list):
        raise InvalidInterfaceError(
            f"Interface must be a JSON array of ABI entries, got {_json_kind(entries)}"
        )

    functions: list[Function] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidInterfaceError(
                f"ABI entry {index} must be an object, got {_json_kind(entry)}"
            )

        reason = exclusion_reason(entry)
        if reason is not None:
            logger.debug("Skipping ABI entry %d (%s): %s", index, entry.get("name", "-"), reason)
            continue

        functions.append(_build_function(index, entry))

    _warn_overloads(functions)
    return Module(
        name=module_name,
        evm_identifier=evm_identifier,
        functions=tuple(functions),
    )


def exclusion_reason(entry: dict[str, Any]) -> Optional[str]:
    """Return why *entry* is not wrapped, or ``None`` if it qualifies.

    Example::

        >>> exclusion_reason({"type": "event", "name": "Transfer"})
        "type is 'event', not 'function'"
    """
    entry_type = entry.get("type")
    if entry_type != "function":
        return f"type is {entry_type!r}, not 'function'"

    if entry.get("stateMutability") == "view":
        return "view function"

    outputs = entry.get("outputs") or []
    if not isinstance(outputs, list):
        return "outputs is not a list"
    for output in outputs:
        output_type = output.get("type") if isinstance(output, dict) else None
        if output_type != BOOL_OUTPUT:
            return f"returns {output_type!r}, only 'bool' outputs are supported"
    return None


def _build_function(index: int, entry: dict[str, Any]) -> Function:
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidInterfaceError(f"Function entry {index} has no name")

    raw_inputs = entry.get("inputs") or []
    if not isinstance(raw_inputs, list):
        raise InvalidInterfaceError(
            f"Inputs of function {name!r} (entry {index}) must be a list"
        )

    inputs: list[Input] = []
    for position, param in enumerate(raw_inputs):
        if not isinstance(param, dict):
            raise InvalidInterfaceError(
                f"Input {position} of function {name!r} (entry {index}) must be an object"
            )
        inputs.append(_build_input(index, name, position, param))

    signature, selector = encode_selector(name, [i.evm_type for i in inputs])
    return Function(
        name=name,
        inputs=tuple(inputs),
        output=BOOL_OUTPUT,
        selector=signature,
        selector_hash=selector.hex(),
    )


def _build_input(index: int, function_name: str, position: int, param: dict[str, Any]) -> Input:
    input_name = param.get("name") or f"arg{position}"
    if not isinstance(input_name, str):
        raise InvalidInterfaceError(
            f"Input {position} of function {function_name!r} (entry {index}) "
            f"has a non-string name"
        )

    location = f"entry {index}, function {function_name!r}, input {input_name!r}"
    try:
        evm_type = expand_tuple_type(param)
        mapped_type = map_raw_type(evm_type)
    except MalformedTypeError as exc:
        raise exc.at(location) from exc
    except InvalidInterfaceError as exc:
        raise InvalidInterfaceError(f"{exc} ({location})") from exc

    return Input(name=input_name, evm_type=evm_type, mapped_type=mapped_type)


def _warn_overloads(functions: list[Function]) -> None:
    counts = Counter(f.name for f in functions)
    for name, count in counts.items():
        if count > 1:
            logger.warning(
                "Function %r is overloaded %d times; the generated messages will clash",
                name,
                count,
            )


def _json_kind(value: Any) -> str:
    """Name of the JSON kind of a decoded value, for error messages."""
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if value is None:
        return "null"
    return type(value).__name__
