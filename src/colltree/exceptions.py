"""Exception hierarchy for colltree.

All exceptions inherit from :class:`ColltreeError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`colltree.exit_codes`.
Commands catch ``ColltreeError`` per argument, report it, and exit with the
first failure's code, while unexpected exceptions produce a crash log and
exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ColltreeError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- ConfigError                (exit 1)
    +-- CollectionLoadError        (exit 7)
    +-- DecodeError                (exit 8)
        +-- MissingFieldError      (exit 8)
        +-- DepthLimitExceededError (exit 8)
"""

from __future__ import annotations

from colltree.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
)


class ColltreeError(Exception):
    """Base exception for all colltree errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`colltree.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ColltreeError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(ColltreeError):
    """Raised for configuration problems (invalid JSON, bad values, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE


class CollectionLoadError(ColltreeError):
    """Raised when a document cannot be loaded or is not a collection at all."""

    exit_code = EXIT_LOAD_ERROR


def format_item_path(path: tuple[int, ...]) -> str:
    """Render an index path as ``item[2].item[1].item[0]``.

    The empty path denotes the top-level ``item`` array itself.
    """
    if not path:
        return "item"
    return ".".join(f"item[{index}]" for index in path)


class DecodeError(ColltreeError):
    """Raised when a node of the item tree does not have the expected shape.

    Args:
        message: Description of the problem at the offending node.
        path: Index chain from the top-level ``item`` array to the node,
            e.g. ``(2, 1, 0)``.
    """

    exit_code = EXIT_DECODE_ERROR

    def __init__(self, message: str, path: tuple[int, ...] = ()):
        self.path = tuple(path)
        self.detail = message
        super().__init__(f"{format_item_path(self.path)}: {message}")


class MissingFieldError(DecodeError):
    """Raised when a node lacks a required field (``name``)."""

    def __init__(self, field: str, path: tuple[int, ...] = ()):
        self.field = field
        super().__init__(f"missing required field '{field}'", path)


class DepthLimitExceededError(DecodeError):
    """Raised when nesting goes deeper than the configured maximum depth."""

    def __init__(self, limit: int, path: tuple[int, ...] = ()):
        self.limit = limit
        super().__init__(f"nesting exceeds the maximum depth of {limit}", path)
