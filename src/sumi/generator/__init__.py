"""Code model generator -- map ABI types, derive selectors, build the module.

This sub-package is the core of the sumi pipeline: it takes the decoded
interface description and constructs the :class:`~sumi.models.Module` that
the template renderer expands into ink! source.

Typical usage::

    from sumi.generator import build_module

    module = build_module(json.loads(text), "erc20", "0x0F")
    for function in module.functions:
        print(function.selector, function.selector_hash)

Sub-modules:

* :mod:`~sumi.generator.type_mapper` -- ABI type to Rust type mapping.
* :mod:`~sumi.generator.selector` -- Canonical signatures and Keccak-256
  selectors.
* :mod:`~sumi.generator.builder` -- Entry filtering and model construction.
"""

from sumi.generator.builder import build_module, exclusion_reason
from sumi.generator.selector import encode_selector, selector_hash
from sumi.generator.type_mapper import map_type

__all__ = [
    "build_module",
    "exclusion_reason",
    "encode_selector",
    "selector_hash",
    "map_type",
]
