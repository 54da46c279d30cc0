"""Exception types raised while walking, parsing and exporting books."""

from __future__ import annotations


class MexError(Exception):
    """Base class for all mex processing errors."""
    pass


class UnsupportedArchiveFormat(MexError):
    """Exception raised when a file extension maps to no archive tool family."""
    pass


class ToolNotInstalled(MexError):
    """Exception raised when no tool of the required family is on the search path."""
    pass


class ToolExecutionFailed(MexError):
    """Exception raised when an archive tool exits with a nonzero status.

    Attributes:
        output: Combined stdout/stderr text produced by the tool
    """

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class NoVolumesFound(MexError):
    """Exception raised when a book resolves to zero volumes."""
    pass


class TemplateError(MexError, ValueError):
    """Exception raised when a naming template references an unknown field."""
    pass
