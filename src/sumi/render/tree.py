"""Convert the typed generator model into a template context tree.

The template engine only understands three kinds of node:

* **record** -- a Pydantic model or mapping, exposed as a ``dict`` whose
  keys are field names;
* **sequence** -- a list or tuple, exposed as a ``list``;
* **scalar** -- ``str``, ``int``, ``float``, ``bool`` or ``None``, passed
  through.

:func:`to_tree` visits the model once and dispatches on node kind. Any other
value is rejected with :class:`~sumi.exceptions.RenderError` before the
template runs, so a model/template mismatch is reported with the path of the
offending node instead of as a half-rendered file.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from sumi.exceptions import RenderError


class NodeKind(str, Enum):
    """The kinds of node a context tree is made of."""

    RECORD = "record"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


_SCALARS = (str, int, float, bool, type(None))


def node_kind(value: Any) -> NodeKind:
    """Classify *value*.

    Raises:
        RenderError: If *value* is none of the three node kinds.
    """
    if isinstance(value, (BaseModel, Mapping)):
        return NodeKind.RECORD
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    if isinstance(value, _SCALARS):
        return NodeKind.SCALAR
    raise RenderError(f"Cannot expose {type(value).__name__} to the template")


def to_tree(value: Any, path: str = "$") -> Any:
    """Return the context tree for *value*.

    Args:
        value: The root model (usually a :class:`~sumi.models.Module`).
        path: Location of *value* in the tree, used in error messages.

    Returns:
        Nested dicts, lists and scalars mirroring *value*.

    Raises:
        RenderError: If any node is not a record, sequence, or scalar. The
            message names the node's path, e.g. ``$.functions[0].inputs``.
    """
    try:
        kind = node_kind(value)
    except RenderError as exc:
        raise RenderError(f"{exc} at {path}") from None

    if kind is NodeKind.RECORD:
        return {
            str(key): to_tree(child, f"{path}.{key}")
            for key, child in _record_items(value)
        }
    if kind is NodeKind.SEQUENCE:
        return [to_tree(child, f"{path}[{idx}]") for idx, child in enumerate(value)]
    return value


def _record_items(value: BaseModel | Mapping[str, Any]) -> list[tuple[str, Any]]:
    if isinstance(value, BaseModel):
        return [(name, getattr(value, name)) for name in type(value).model_fields]
    return list(value.items())
