"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~colltree.exceptions.ColltreeError` subclass.
Shell wrappers can inspect the exit code to tell a missing file apart from
a malformed collection without parsing stderr.

Example::

    $ colltree tree broken.json
    $ echo $?
    8   # EXIT_DECODE_ERROR -- the item tree could not be decoded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_LOAD_ERROR = 7
"""A collection document could not be read, fetched, or parsed."""

EXIT_DECODE_ERROR = 8
"""A collection's item tree did not have the expected structure."""
