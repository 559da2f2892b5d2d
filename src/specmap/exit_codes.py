"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specmap.exceptions.SpecmapError` subclass.
Scripts wrapping ``specmap check`` can inspect the exit code to tell an
unreachable source apart from a document that failed to decode.

Example::

    $ specmap check broken.json
    $ echo $?
    4   # EXIT_DESERIALIZATION_ERROR -- the document did not decode
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SOURCE_ERROR = 3
"""The spec source could not be read (missing file, HTTP error, size limit)."""

EXIT_DESERIALIZATION_ERROR = 4
"""The document is not well-formed JSON or does not match the model's shape."""
