"""
Plumbing shared by the format readers and writers.

Readers and writers accept either a path or an already open text stream.
Paths ending in ``.gz`` are opened through gzip. In both cases the
reader/writer owns the stream and closes it on ``close()``.
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Iterator, Optional, Tuple, Union

from seqstream.io.errors import UnsupportedOperation
from seqstream.sequence.record import SeqRecord

logger = logging.getLogger(__name__)

PathOrStream = Union[str, Path, IO[str]]


def _open_file(filepath: Union[str, Path], mode: str = "rt"):
    """Open a file, handling gzip compression if needed."""
    filepath = Path(filepath)
    logger.debug("Opening %s (mode=%s)", filepath, mode)
    if filepath.suffix == ".gz":
        return gzip.open(filepath, mode)
    return open(filepath, mode)


def _parse_header(text: str) -> Tuple[str, str]:
    """Split header text into ID and description at the first whitespace run."""
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    seq_id = parts[0]
    description = parts[1].strip() if len(parts) > 1 else ""
    return seq_id, description


def _resolve_stream(source: PathOrStream, mode: str) -> IO[str]:
    if isinstance(source, (str, Path)):
        return _open_file(source, mode)
    return source


class _Stream:
    """Ownership and context-manager behaviour for a wrapped stream."""

    def __init__(self, source: PathOrStream, mode: str):
        self._stream = _resolve_stream(source, mode)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        logger.debug("Closing %r", self._stream)
        self._stream.close()


class SequenceReader(_Stream):
    """
    Base class for single-record readers.

    Subclasses implement ``read()``, which returns the next record, or
    None once the stream is exhausted. Iterating over a reader yields
    records until then.
    """

    def __init__(self, source: PathOrStream):
        super().__init__(source, "rt")

    def read(self) -> Optional[SeqRecord]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[SeqRecord]:
        while True:
            record = self.read()
            if record is None:
                return
            yield record

    def _reset(self) -> None:
        """Clear any state carried between reads."""

    def rewind(self) -> None:
        """
        Seek the underlying stream back to its start.

        Raises:
            UnsupportedOperation: If the stream cannot seek. Reader state
                is left untouched in that case.
        """
        seekable = getattr(self._stream, "seekable", None)
        if seekable is None or not seekable():
            raise UnsupportedOperation(f"Stream {self._stream!r} is not seekable")
        self._stream.seek(0)
        self._reset()
        logger.debug("Rewound %r", self._stream)


class SequenceWriter(_Stream):
    """
    Base class for single-record writers.

    ``bytes_written`` counts every byte successfully handed to the stream
    over the writer's lifetime, including the part of a record written
    before a failure. Bytes are measured in the stream's own text encoding
    (UTF-8 when it has none).
    """

    def __init__(self, sink: PathOrStream):
        super().__init__(sink, "wt")
        self.bytes_written = 0
        self._byte_encoding = getattr(self._stream, "encoding", None) or "utf-8"

    def write(self, record: SeqRecord) -> int:
        raise NotImplementedError

    def _emit(self, text: str) -> int:
        written = self._stream.write(text)
        if written is not None:
            text = text[:written]
        n = len(text.encode(self._byte_encoding))
        self.bytes_written += n
        return n

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self.flush()
        finally:
            super().close()
