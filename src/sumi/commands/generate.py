"""Generate command -- turn an ABI into an ink! wrapper module.

Implements ``sumi generate``: resolves the module name and EVM id through
the configuration precedence chain, loads the interface description, runs
:func:`~sumi.pipeline.generate`, and writes the result to stdout or to a
file. File output is written atomically, so a failed run never leaves a
partial ``lib.rs`` behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from sumi.commands import exit_on_error
from sumi.exceptions import InvalidUsageError
from sumi.output import debug, print_data, success


def generate_command(
    input_source: str = typer.Option(
        "-",
        "--input",
        "-i",
        help="ABI file path, http(s) URL, or '-' for stdin.",
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file. Defaults to stdout.",
        dir_okay=False,
    ),
    module_name: Optional[str] = typer.Option(
        None,
        "--module-name",
        "-m",
        help="ink! module name to generate.",
    ),
    evm_id: Optional[str] = typer.Option(
        None,
        "--evm-id",
        "-e",
        help="EVM id to use in the module (default 0x0F).",
    ),
) -> None:
    """Generate an ink! module that forwards calls to an EVM contract.

    Only state-mutating functions whose outputs are all ``bool`` are
    wrapped; everything else in the ABI is skipped.

    Args:
        input_source: Where to read the ABI from.
        output_path: Where to write the module. ``None`` writes to stdout.
        module_name: Module name override (highest precedence).
        evm_id: EVM id override (highest precedence).

    Raises:
        InvalidUsageError: If no module name is configured anywhere.

    Example::

        sumi generate -i erc20.json -m erc20 -o lib.rs
        cat erc20.json | sumi generate -m erc20 > lib.rs
    """
    from sumi.config import atomic_write, resolve_generator_config
    from sumi.parser import load_interface
    from sumi.pipeline import generate

    with exit_on_error():
        settings = resolve_generator_config(cli_module_name=module_name, cli_evm_id=evm_id)
        if settings.module_name is None:
            raise InvalidUsageError(
                "No module name given. Pass --module-name, set SUMI_MODULE_NAME, "
                "or add module_name to sumi.json"
            )

        debug(f"Reading interface from {'stdin' if input_source == '-' else input_source}")
        text = load_interface(input_source)
        source = generate(text, settings.module_name, settings.evm_id)

    if output_path is None:
        print_data(source)
        return

    atomic_write(output_path, source)
    success(f"Wrote module {settings.module_name} to {output_path}")
