"""
FASTA file format reader and writer.

A FASTA record is a header line starting with '>' followed by any number
of sequence lines. Records end where the next header begins, so the
reader holds on to a header it has already consumed until the following
call to ``read()``.
"""

from io import StringIO
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union

from seqstream.io.base import (
    PathOrStream,
    SequenceReader,
    SequenceWriter,
    _open_file,
    _parse_header,
)
from seqstream.sequence.record import SeqRecord

DEFAULT_LINE_WIDTH = 60
DEFAULT_ID_PREFIX = ">"
DEFAULT_SEQ_PREFIX = ""


class FastaReader(SequenceReader):
    """
    Reads FASTA records one at a time.

    Args:
        source: Path or open text stream
        id_prefix: Marker that starts a header line
        seq_prefix: Marker that starts a sequence line. The empty default
            treats every other non-blank line as sequence.

    Lines matching neither prefix are ignored.
    """

    def __init__(
        self,
        source: PathOrStream,
        id_prefix: str = DEFAULT_ID_PREFIX,
        seq_prefix: str = DEFAULT_SEQ_PREFIX
    ):
        super().__init__(source)
        self.id_prefix = id_prefix
        self.seq_prefix = seq_prefix
        self._lookahead: Optional[str] = None

    def _reset(self) -> None:
        self._lookahead = None

    def read(self) -> Optional[SeqRecord]:
        """
        Read the next record.

        Returns:
            The next SeqRecord, or None if the stream holds no more records
        """
        label = self._lookahead
        self._lookahead = None
        body = []

        for line in iter(self._stream.readline, ""):
            line = line.strip()
            if not line:
                continue

            if line.startswith(self.id_prefix):
                header = line[len(self.id_prefix):].strip()
                if label is None:
                    label = header
                    body = []
                else:
                    self._lookahead = header
                    break
            elif line.startswith(self.seq_prefix):
                body.append("".join(line[len(self.seq_prefix):].split()))

        if label is None:
            return None

        seq_id, description = _parse_header(label)
        return SeqRecord(id=seq_id, sequence="".join(body), description=description)


class FastaWriter(SequenceWriter):
    """
    Writes FASTA records one at a time.

    Args:
        sink: Path or open text stream
        line_width: Number of characters per sequence line
        id_prefix: Marker written before the header text
        seq_prefix: Marker written before each sequence line
    """

    def __init__(
        self,
        sink: PathOrStream,
        line_width: int = DEFAULT_LINE_WIDTH,
        id_prefix: str = DEFAULT_ID_PREFIX,
        seq_prefix: str = DEFAULT_SEQ_PREFIX
    ):
        if line_width <= 0:
            raise ValueError(f"line_width must be positive, got {line_width}")
        super().__init__(sink)
        self.line_width = line_width
        self.id_prefix = id_prefix
        self.seq_prefix = seq_prefix

    def write(self, record: SeqRecord) -> int:
        """
        Write a single record.

        An empty sequence still produces one (empty) sequence line.

        Returns:
            Number of bytes written
        """
        n = self._emit(f"{self.id_prefix}{record.header}\n")
        sequence = record.sequence
        for i in range(0, max(len(sequence), 1), self.line_width):
            n += self._emit(self.seq_prefix + sequence[i:i + self.line_width] + "\n")
        return n


def read_fasta(
    filepath: PathOrStream,
    uppercase: bool = True
) -> Iterator[SeqRecord]:
    """
    Read sequences from a FASTA file.

    Supports both plain text and gzip-compressed files.

    Args:
        filepath: Path to FASTA file (.fasta, .fa, .fna, or .gz) or open stream
        uppercase: Convert sequences to uppercase

    Yields:
        SeqRecord objects

    Example:
        >>> for record in read_fasta("sequences.fasta"):
        ...     print(f"{record.id}: {len(record)} bp")
    """
    with FastaReader(filepath) as reader:
        for record in reader:
            if uppercase:
                record.sequence = record.sequence.upper()
            yield record


def parse_fasta_string(
    content: str,
    uppercase: bool = True
) -> Iterator[SeqRecord]:
    """
    Parse FASTA format from a string.

    Args:
        content: FASTA formatted string
        uppercase: Convert sequences to uppercase

    Yields:
        SeqRecord objects
    """
    yield from read_fasta(StringIO(content), uppercase=uppercase)


def write_fasta(
    records: Union[SeqRecord, Iterable[SeqRecord]],
    filepath: Union[str, Path],
    line_width: int = DEFAULT_LINE_WIDTH,
    compress: bool = False
) -> int:
    """
    Write sequences to a FASTA file.

    Args:
        records: Single record or iterable of SeqRecord objects
        filepath: Output file path
        line_width: Number of characters per sequence line
        compress: If True, write gzip-compressed file

    Returns:
        Number of bytes written

    Example:
        >>> records = [SeqRecord("seq1", "ACGT", description="example")]
        >>> write_fasta(records, "output.fasta")
        19
    """
    if isinstance(records, SeqRecord):
        records = [records]

    filepath = Path(filepath)
    if compress and not filepath.suffix == ".gz":
        filepath = Path(str(filepath) + ".gz")

    with FastaWriter(_open_file(filepath, "wt"), line_width=line_width) as writer:
        for record in records:
            writer.write(record)
        return writer.bytes_written


def load_fasta_dict(
    filepath: PathOrStream,
    uppercase: bool = True
) -> Dict[str, str]:
    """
    Load FASTA file as dictionary mapping IDs to sequences.

    Args:
        filepath: Path to FASTA file
        uppercase: Convert sequences to uppercase

    Returns:
        Dictionary mapping sequence IDs to sequences
    """
    return {
        record.id: record.sequence
        for record in read_fasta(filepath, uppercase=uppercase)
    }
