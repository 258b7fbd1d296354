"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~pybites_search.exceptions.SearchError` subclass.
Shell wrappers can inspect the exit code to tell a bad argument from a
network outage without parsing stderr.

Example::

    $ pybites-search regex -c xyz
    $ echo $?
    2   # EXIT_INVALID_USAGE -- unknown content type
"""

EXIT_SUCCESS = 0
"""The search ran. Zero matches is still a success."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration errors)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SERVER_ERROR = 5
"""The catalog returned a non-2xx status or a payload of the wrong shape."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CANCELLED = 130
"""The user interrupted the command with Ctrl-C."""
