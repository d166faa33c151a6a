"""Text filters available to the module template.

Each filter is a pure ``(str) -> str`` transform invoked from the template
as ``{{ value | filter_name }}``. A filter applied to anything other than a
string raises :class:`~sumi.exceptions.FilterTypeError`; that can only
happen when the template and the model disagree, and it must surface as a
defined error rather than as garbage in the generated code.

:func:`build_filters` returns a fresh name-to-function mapping that the
renderer receives explicitly; there is no global registry.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from sumi.exceptions import FilterTypeError

Filter = Callable[[Any], str]


# ---------------------------------------------------------------------------
# Word splitting
# ---------------------------------------------------------------------------

_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[_\-\s]+")


def split_words(text: str) -> list[str]:
    """Split an identifier into words.

    Boundaries are lower-to-upper case changes (``transferFrom``), the end
    of an acronym (``XMLParser``), and ``_``, ``-`` or whitespace runs.

    Example::

        >>> split_words("safeTransferFrom")
        ['safe', 'Transfer', 'From']
        >>> split_words("ERC20Token")
        ['ERC20', 'Token']
    """
    result = _LOWER_UPPER_RE.sub(r"\1_\2", text)
    result = _ACRONYM_RE.sub(r"\1_\2", result)
    return [word for word in _SEPARATOR_RE.split(result) if word]


def _require_str(filter_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise FilterTypeError(
            f"Filter {filter_name!r} expects a string, got {type(value).__name__}"
        )
    return value


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def snake(value: Any) -> str:
    """``transferFrom`` -> ``transfer_from``."""
    text = _require_str("snake", value)
    return "_".join(word.lower() for word in split_words(text))


def upper_snake(value: Any) -> str:
    """``transferFrom`` -> ``TRANSFER_FROM``."""
    text = _require_str("upper_snake", value)
    return "_".join(word.upper() for word in split_words(text))


def capitalize(value: Any) -> str:
    """Uppercase the first character and leave the rest untouched.

    Unlike :meth:`str.capitalize` (and Jinja's built-in filter of the same
    name) the remainder is not lowercased: ``transferFrom`` becomes
    ``TransferFrom``.
    """
    text = _require_str("capitalize", value)
    return text[:1].upper() + text[1:]


def build_filters() -> dict[str, Filter]:
    """Return the filter table passed to :class:`~sumi.render.renderer.ModuleRenderer`."""
    return {
        "snake": snake,
        "upper_snake": upper_snake,
        "capitalize": capitalize,
    }
