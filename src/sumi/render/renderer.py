"""Expand the module template against a generator model.

:class:`ModuleRenderer` wraps a Jinja2 environment configured for source
code rather than markup: autoescaping is off, undefined names raise instead
of rendering as empty text, and block tags on their own line leave no blank
lines behind. Jinja2 errors are translated into
:class:`~sumi.exceptions.RenderError`; :class:`~sumi.exceptions.FilterTypeError`
raised by a filter propagates unchanged.

The model is converted with :func:`~sumi.render.tree.to_tree` before
expansion, so templates only ever see dicts, lists and scalars.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    Undefined,
    UndefinedError,
    select_autoescape,
)

from sumi.exceptions import RenderError
from sumi.render.filters import Filter
from sumi.render.tree import NodeKind, node_kind, to_tree

logger = logging.getLogger(__name__)


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``render/templates/``)."""

MODULE_TEMPLATE = "module.rs.j2"
"""Template producing the ink! wrapper module."""


class ModuleRenderer:
    """Render generator models through Jinja2 templates.

    Args:
        filters: Name-to-function table installed into the environment,
            usually :func:`~sumi.render.filters.build_filters`. Entries
            override Jinja2 built-ins of the same name.
        template_dir: Directory the templates are loaded from.
        template_name: Template used by :meth:`render`.

    Example::

        renderer = ModuleRenderer(build_filters())
        source = renderer.render(module)
    """

    def __init__(
        self,
        filters: Mapping[str, Filter],
        template_dir: Path = TEMPLATE_DIR,
        template_name: str = MODULE_TEMPLATE,
    ) -> None:
        self._template_name = template_name
        self._env = _create_jinja_env(template_dir)
        for name, func in filters.items():
            self._env.filters[name] = _guard_undefined(name, func)

    def render(self, model: Any) -> str:
        """Render the configured template with *model* as the context root.

        Args:
            model: A record node, usually a :class:`~sumi.models.Module`.
                Its fields become the template's top-level names.

        Raises:
            RenderError: If the template cannot be loaded or expanded.
            FilterTypeError: If a filter receives a non-string value.
        """
        logger.debug("Rendering template %s", self._template_name)
        try:
            template = self._env.get_template(self._template_name)
        except TemplateNotFound as exc:
            raise RenderError(f"Template not found: {exc.name}") from exc
        except TemplateSyntaxError as exc:
            raise RenderError(_syntax_message(exc)) from exc
        return self._expand(template, model)

    def render_source(self, source: str, model: Any) -> str:
        """Render template text *source* with *model* as the context root.

        Uses the same environment and filters as :meth:`render`.

        Raises:
            RenderError: If *source* does not compile or cannot be expanded.
            FilterTypeError: If a filter receives a non-string value.
        """
        try:
            template = self._env.from_string(source)
        except TemplateSyntaxError as exc:
            raise RenderError(_syntax_message(exc)) from exc
        return self._expand(template, model)

    def _expand(self, template: Template, model: Any) -> str:
        if node_kind(model) is not NodeKind.RECORD:
            raise RenderError(
                f"Template context must be a record, got {type(model).__name__}"
            )
        context = to_tree(model)
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise RenderError(f"Undefined name in template: {exc.message}") from exc
        except TemplateError as exc:
            raise RenderError(f"Template expansion failed: {exc}") from exc
        except TypeError as exc:
            raise RenderError(f"Template expansion failed: {exc}") from exc


def _create_jinja_env(template_dir: Path) -> Environment:
    """Create the Jinja2 environment for source templates.

    Autoescape stays disabled for ``.rs.j2`` templates (the output is Rust,
    not HTML). ``StrictUndefined`` turns every reference to a missing name
    into an error. Block trimming and lstrip keep control lines out of the
    output.
    """
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(disabled_extensions=("rs.j2",), default_for_string=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _guard_undefined(name: str, func: Filter) -> Filter:
    """Report undefined filter arguments as undefined names, not type errors."""

    def _filter(value: Any) -> str:
        if isinstance(value, Undefined):
            raise RenderError(f"Filter {name!r} applied to an undefined value")
        return func(value)

    _filter.__name__ = getattr(func, "__name__", name)
    _filter.__doc__ = func.__doc__
    return _filter


def _syntax_message(exc: TemplateSyntaxError) -> str:
    where = exc.name or "<string>"
    return f"Template syntax error in {where}, line {exc.lineno}: {exc.message}"
