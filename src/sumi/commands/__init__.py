"""Built-in CLI sub-commands for sumi.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~sumi.commands.generate` -- render the ink! wrapper module.
* :mod:`~sumi.commands.inspect` -- list wrapped and skipped ABI entries,
  compute selectors.
* :mod:`~sumi.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``generate``).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from sumi.exceptions import SumiError
from sumi.output import error


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report a :class:`~sumi.exceptions.SumiError` and exit with its code.

    Commands wrap their body in this context manager so that the process
    exit code identifies the failure class, both under the ``sumi``
    console script and under :class:`typer.testing.CliRunner`.
    """
    try:
        yield
    except SumiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
