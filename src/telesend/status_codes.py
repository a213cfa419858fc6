"""Numeric result codes shared by the library and the ``telesend`` CLI.

Outcome codes are carried by :class:`~telesend.models.ErrorResult`.  Every
failure, whichever layer it comes from, reports
:data:`ERROR_INTERNAL_ERROR`; :data:`SUCCESS` only exists so callers can
compare against it.

Exit codes follow `clig.dev <https://clig.dev/>`_ conventions and are what
the ``telesend`` console script returns to the shell.

Example::

    $ telesend send "deploy finished"
    $ echo $?
    0
"""

SUCCESS = 0
"""The message was accepted by the backend."""

ERROR_INTERNAL_ERROR = 1
"""Any failure: URL build, serialization, transport, or remote rejection."""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_SEND_FAILURE = 1
"""The message could not be delivered."""

EXIT_INVALID_USAGE = 2
"""Missing credentials, bad flags, or an unreadable config file."""
