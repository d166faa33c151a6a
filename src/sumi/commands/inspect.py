"""Inspect commands -- examine what the generator will do with an ABI.

Provides the ``sumi inspect`` sub-command group with read-only commands:

* ``functions`` -- the functions that will be wrapped, with their
  signatures, selectors and mapped parameter types;
* ``skipped`` -- the ABI entries the generator leaves out, and why;
* ``selector`` -- the 4-byte selector of an arbitrary signature.

All listings honour the global ``--json`` / ``--plain`` flags.
"""

from __future__ import annotations

import typer

from sumi.commands import exit_on_error
from sumi.output import get_output, info, print_table


inspect_app = typer.Typer(no_args_is_help=True)


_INPUT_OPTION = typer.Option(
    "-", "--input", "-i", help="ABI file path, http(s) URL, or '-' for stdin."
)


@inspect_app.command("functions")
def inspect_functions(
    input_source: str = _INPUT_OPTION,
) -> None:
    """List the functions that will be wrapped.

    Example::

        sumi inspect functions -i erc20.json
        sumi --json inspect functions -i erc20.json
    """
    from sumi.parser import load_interface
    from sumi.pipeline import build

    with exit_on_error():
        module = build(load_interface(input_source), "inspect", "0")

    if not module.functions:
        info("No functions qualify for wrapping.")
        return

    headers = ["Function", "Signature", "Selector", "Parameters"]
    rows: list[list[str]] = []
    for function in module.functions:
        params = ", ".join(f"{i.name}: {i.mapped_type}" for i in function.inputs)
        rows.append([
            function.name,
            function.selector,
            function.selector_hash,
            params or "-",
        ])

    print_table(
        headers, rows, title=f"Wrapped functions ({len(rows)})"
    )


@inspect_app.command("skipped")
def inspect_skipped(
    input_source: str = _INPUT_OPTION,
) -> None:
    """List the ABI entries the generator skips, with the reason.

    Example::

        sumi inspect skipped -i erc20.json
    """
    from sumi.generator import build_module, exclusion_reason
    from sumi.parser import load_interface
    from sumi.pipeline import parse_interface

    with exit_on_error():
        entries = parse_interface(load_interface(input_source))
        # Validates the whole document before anything is listed.
        build_module(entries, "inspect", "0")

    headers = ["Index", "Type", "Name", "Reason"]
    rows: list[list[str]] = []
    for index, entry in enumerate(entries):
        reason = exclusion_reason(entry)
        if reason is None:
            continue
        rows.append([
            str(index),
            str(entry.get("type", "-")),
            str(entry.get("name", "-")),
            reason,
        ])

    if not rows:
        info("Every entry qualifies for wrapping.")
        return

    print_table(headers, rows, title=f"Skipped entries ({len(rows)})")


@inspect_app.command("selector")
def inspect_selector(
    signature: str = typer.Argument(
        help="Canonical signature, e.g. 'transfer(address,uint256)'."
    ),
) -> None:
    """Print the 4-byte selector of a function signature.

    The signature is hashed exactly as given; no whitespace or type
    normalisation is applied.

    Example::

        sumi inspect selector 'transfer(address,uint256)'
    """
    from sumi.generator import selector_hash

    get_output().format_response({
        "signature": signature,
        "selector": selector_hash(signature),
    })
