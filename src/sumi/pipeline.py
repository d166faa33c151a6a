"""The generation pipeline: interface text in, module source out.

:func:`generate` is the one entry point the CLI (or any other caller) uses.
It decodes the JSON document, builds the :class:`~sumi.models.Module`,
and renders it. The function is pure: it performs no I/O, and it either
returns the complete source or raises a
:class:`~sumi.exceptions.GenerationError` -- there is no partial result.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from sumi.exceptions import InvalidInterfaceError
from sumi.generator import build_module
from sumi.models import Module
from sumi.render import ModuleRenderer, build_filters

logger = logging.getLogger(__name__)


def parse_interface(json_text: str) -> Any:
    """Decode interface text; its shape is checked by :func:`~sumi.generator.build_module`.

    Raises:
        InvalidInterfaceError: If *json_text* is not valid JSON.
    """
    try:
        return json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise InvalidInterfaceError(
            f"Interface is not valid JSON (line {exc.lineno}, column {exc.colno}): {exc.msg}"
        ) from exc
    except RecursionError as exc:
        raise InvalidInterfaceError("Interface is nested too deeply to decode") from exc


def build(json_text: str, module_name: str, runtime_identifier: str) -> Module:
    """Decode *json_text* and build the generator model without rendering it."""
    return build_module(parse_interface(json_text), module_name, runtime_identifier)


def generate(
    json_text: str,
    module_name: str,
    runtime_identifier: str,
    renderer: Optional[ModuleRenderer] = None,
) -> str:
    """Generate the ink! wrapper module for an interface description.

    Args:
        json_text: The ABI document, a JSON array of entries.
        module_name: Name of the generated module, used verbatim and
            case-transformed by the template.
        runtime_identifier: EVM id literal embedded verbatim.
        renderer: Renderer to use. Defaults to the packaged module template
            with the standard filters.

    Returns:
        The module source, terminated by exactly one newline.

    Raises:
        InvalidInterfaceError: If the document is not a JSON array of objects
            or a wrapped entry is incomplete.
        MalformedTypeError: If an input type is outside the ABI grammar.
        FilterTypeError: If the template applies a filter to a non-string.
        RenderError: If template expansion fails.
    """
    module = build(json_text, module_name, runtime_identifier)
    logger.debug(
        "Built module %s with %d function(s)", module.name, len(module.functions)
    )

    if renderer is None:
        renderer = ModuleRenderer(build_filters())
    rendered = renderer.render(module)
    return rendered.rstrip("\n") + "\n"
