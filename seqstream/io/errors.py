"""
Exceptions raised by sequence readers and writers.

Errors from the underlying stream (``OSError``) are never wrapped; they
reach the caller unchanged.
"""

import io


class SeqIOError(Exception):
    """Base class for all sequence I/O errors."""


class ProtocolError(SeqIOError, ValueError):
    """The input violates the structure of the record format."""


class IncompleteRecordError(SeqIOError, EOFError):
    """The stream ended part way through a record."""


class UnsupportedOperation(SeqIOError, io.UnsupportedOperation):
    """The underlying stream does not support the requested operation."""
