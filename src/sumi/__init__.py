"""sumi -- Generate ink! wrapper contracts from EVM ABI descriptions.

This package reads a Solidity/EVM ABI (a JSON list of entries), selects the
state-mutating, boolean-returning functions, and renders an ink! module that
forwards each call to the EVM contract through the XVM chain extension.

Typical workflow::

    sumi generate -i erc20.json -m erc20 -o lib.rs
    sumi inspect functions -i erc20.json

Modules:
    app: Typer application and CLI entry point.
    pipeline: The :func:`~sumi.pipeline.generate` entry point.
    models: Pydantic models (ABI types, generator model, configuration).
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
