"""
errors.py — Error hierarchy for document exports.

Every failure raised out of the builders and serializers is an
ExportError subclass; the original library exception is kept as
__cause__.
"""

from typing import Optional


class ExportError(Exception):
    """Root of all export failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class BuildError(ExportError):
    """Invalid schema or data handed to a builder."""


class EncodingError(ExportError):
    """The encoder failed while producing bytes."""


class ExportIOError(ExportError):
    """Writing the artifact to the filesystem failed."""


class StreamError(ExportError):
    """The output stream was aborted or used incorrectly."""


class ReportClosedError(StreamError):
    """Content was appended to a report after finish()."""
