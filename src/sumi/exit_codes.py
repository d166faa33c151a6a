"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sumi.exceptions.SumiError` subclass. Build scripts
can inspect the exit code to tell a bad ABI apart from a bad invocation
without parsing stderr.

Example::

    $ sumi generate -i broken.json -m erc20
    $ echo $?
    6   # EXIT_MALFORMED_TYPE -- an input type is outside the ABI grammar
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_LOAD_FAILURE = 3
"""The interface description could not be read or fetched."""

EXIT_GENERATION_FAILURE = 4
"""Code generation failed for an unclassified reason."""

EXIT_INVALID_INTERFACE = 5
"""The interface description does not have the expected shape."""

EXIT_MALFORMED_TYPE = 6
"""An ABI type string does not parse against the type grammar."""

EXIT_FILTER_TYPE_ERROR = 7
"""A template filter was applied to a non-string value."""

EXIT_RENDER_ERROR = 8
"""Template expansion failed."""
