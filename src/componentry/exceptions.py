"""Exception hierarchy for componentry.

All exceptions inherit from :class:`ComponentryError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`componentry.exit_codes`. The CLI entry point in
:func:`componentry.app.main` catches ``ComponentryError`` and exits with
the appropriate code.

The library itself never catches errors raised by the filesystem, by a
component's ``initialize.py`` or by its hooks: they propagate unmodified
and abort the host's startup.

Subclass hierarchy::

    ComponentryError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- ComponentNotFoundError     (exit 4)
    +-- MalformedInitializerError  (exit 8)
    +-- ConfigError                (exit 1)
"""

from componentry.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_INITIALIZER,
    EXIT_NOT_FOUND,
)


class ComponentryError(Exception):
    """Base exception for all componentry errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`componentry.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ComponentryError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ComponentNotFoundError(ComponentryError):
    """Raised when a component name does not match any discovered directory."""

    exit_code = EXIT_NOT_FOUND


class MalformedInitializerError(ComponentryError):
    """Raised when an ``initialize.py`` file declares no hook handle."""

    exit_code = EXIT_MALFORMED_INITIALIZER


class ConfigError(ComponentryError):
    """Raised for configuration problems (invalid settings file, colliding component names)."""

    exit_code = EXIT_GENERIC_FAILURE
