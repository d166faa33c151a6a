"""Template rendering -- expand the generator model into ink! source.

Sub-modules:

* :mod:`~sumi.render.tree` -- Typed model to record/sequence/scalar context.
* :mod:`~sumi.render.filters` -- The ``snake``, ``upper_snake`` and
  ``capitalize`` text filters.
* :mod:`~sumi.render.renderer` -- The Jinja2-backed :class:`ModuleRenderer`.
"""

from sumi.render.filters import build_filters
from sumi.render.renderer import ModuleRenderer
from sumi.render.tree import to_tree

__all__ = ["ModuleRenderer", "build_filters", "to_tree"]
