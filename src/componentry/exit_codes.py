"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~componentry.exceptions.ComponentryError` subclass.
Boot scripts and CI jobs can inspect the exit code of ``componentry boot``
to tell a missing component from a broken initializer without parsing
stderr.

Example::

    $ componentry components show Accounting
    $ echo $?
    4   # EXIT_NOT_FOUND -- no component directory maps to that name
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""The requested component was not found."""

EXIT_MALFORMED_INITIALIZER = 8
"""A component initializer was loaded but declares no hook handle."""
