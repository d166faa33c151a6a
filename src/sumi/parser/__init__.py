"""Interface parser -- load ABI documents and parse their type strings.

This sub-package is responsible for the input side of the sumi pipeline:
fetching the raw interface description (local file, remote URL or stdin)
and turning textual ABI types into :data:`~sumi.models.ParamType` values.

Typical usage::

    from sumi.parser import load_interface, parse_type

    text = load_interface("erc20.json")
    param_type = parse_type("(address,uint256)[]")

Sub-modules:

* :mod:`~sumi.parser.loader` -- I/O layer (URL, file, stdin).
* :mod:`~sumi.parser.types` -- The ABI type grammar, including expansion of
  JSON ``tuple`` components into canonical text.
"""

from sumi.parser.loader import load_interface
from sumi.parser.types import expand_tuple_type, parse_type

__all__ = ["load_interface", "parse_type", "expand_tuple_type"]
