"""Exception hierarchy for sumi.

All exceptions inherit from :class:`SumiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sumi.exit_codes`.
The top-level error handler in :func:`sumi.app.main` catches ``SumiError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Errors raised by the generation core derive from :class:`GenerationError`,
so a caller of :func:`sumi.pipeline.generate` only needs to catch that one
type.

Subclass hierarchy::

    SumiError (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- ConfigError              (exit 1)
    +-- InterfaceLoadError       (exit 3)
    +-- GenerationError          (exit 4)
        +-- InvalidInterfaceError  (exit 5)
        +-- MalformedTypeError     (exit 6)
        +-- FilterTypeError        (exit 7)
        +-- RenderError            (exit 8)
"""

from __future__ import annotations

from typing import Optional

from sumi.exit_codes import (
    EXIT_FILTER_TYPE_ERROR,
    EXIT_GENERATION_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_INTERFACE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_FAILURE,
    EXIT_MALFORMED_TYPE,
    EXIT_RENDER_ERROR,
)


class SumiError(Exception):
    """Base exception for all sumi errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`sumi.exit_codes`. The entry point catches this
    exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SumiError):
    """Raised for invalid CLI arguments or a module name that cannot be resolved."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SumiError):
    """Raised for configuration problems (invalid JSON, bad EVM id, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE


class InterfaceLoadError(SumiError):
    """Raised when the interface description cannot be read from its source."""

    exit_code = EXIT_LOAD_FAILURE


class GenerationError(SumiError):
    """Base class for every failure of the generation pipeline."""

    exit_code = EXIT_GENERATION_FAILURE


class InvalidInterfaceError(GenerationError):
    """Raised when the ABI is not a list of objects or an entry is missing required fields."""

    exit_code = EXIT_INVALID_INTERFACE


class MalformedTypeError(GenerationError):
    """Raised when an ABI type string does not parse against the type grammar.

    Args:
        raw_type: The offending type text, exactly as given.
        reason: Short description of what is wrong with it.
        location: Optional human-readable position of the type inside the
            interface (entry index, function and input name).
    """

    exit_code = EXIT_MALFORMED_TYPE

    def __init__(
        self,
        raw_type: str,
        reason: str,
        location: Optional[str] = None,
    ) -> None:
        self.raw_type = raw_type
        self.reason = reason
        self.location = location
        message = f"Malformed ABI type {raw_type!r}: {reason}"
        if location:
            message = f"{message} ({location})"
        super().__init__(message)

    def at(self, location: str) -> MalformedTypeError:
        """Return a copy of this error annotated with *location*."""
        return MalformedTypeError(self.raw_type, self.reason, location)


class FilterTypeError(GenerationError):
    """Raised when a template filter receives a value that is not a string."""

    exit_code = EXIT_FILTER_TYPE_ERROR


class RenderError(GenerationError):
    """Raised when template expansion fails (undefined name, syntax error, bad model node)."""

    exit_code = EXIT_RENDER_ERROR
