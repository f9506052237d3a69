"""Exceptions raised by swagger-tree.

The CLI turns any SwaggerTreeError into a one-line error and a
non-zero exit code; anything else is a bug and propagates.
"""


class SwaggerTreeError(Exception):
    """Base exception for swagger-tree failures."""


class SurfaceNotFoundError(SwaggerTreeError):
    """The requested API surface could not be resolved."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"cannot resolve API surface '{identifier}': {reason}")
        self.identifier = identifier
        self.reason = reason


class ConfigError(SwaggerTreeError):
    """A configuration source is unreadable or invalid."""


class OutputWriteError(SwaggerTreeError):
    """The output tree could not be created or written."""


class CompileError(SwaggerTreeError):
    """A generated tree could not be read back into a single document."""
