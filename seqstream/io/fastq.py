"""
FASTQ file format reader and writer.

FASTQ is a text-based format for storing nucleotide sequences
along with quality scores. Each record consists of 4 lines:
1. Header line starting with '@' followed by sequence ID
2. Sequence line
3. '+' line (optionally followed by the ID again)
4. Quality line (ASCII-encoded quality scores)

Quality blocks that span several lines are not supported: the first
quality line must cover the whole sequence.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from seqstream.io.base import (
    PathOrStream,
    SequenceReader,
    SequenceWriter,
    _open_file,
    _parse_header,
)
from seqstream.io.errors import IncompleteRecordError, ProtocolError
from seqstream.sequence.quality import DEFAULT_ENCODING, QualityEncoding, quality_to_phred
from seqstream.sequence.record import SeqRecord

HEADER_PREFIX = "@"
QUALITY_PREFIX = "+"


class FastqReader(SequenceReader):
    """
    Reads FASTQ records one at a time.

    Args:
        source: Path or open text stream
        encoding: Quality encoding of the input. Pass
            ``QualityEncoding.NONE`` to keep the raw character codes.

    Example:
        >>> with FastqReader("reads.fastq") as reader:
        ...     for record in reader:
        ...         print(record.id, record.mean_quality())
    """

    def __init__(
        self,
        source: PathOrStream,
        encoding: Optional[QualityEncoding] = DEFAULT_ENCODING
    ):
        super().__init__(source)
        self.encoding = encoding or QualityEncoding.NONE

    def read(self) -> Optional[SeqRecord]:
        """
        Read the next record.

        Returns:
            The next SeqRecord, or None if the stream holds no more records

        Raises:
            ProtocolError: On a '+' line without a header, a '+' line naming
                a different sequence, or a quality line whose length differs
                from the sequence or that holds characters wider than a byte
            IncompleteRecordError: If the stream ends inside a record
        """
        header = None
        letters = []
        in_quality = False
        started = False

        while True:
            line = self._stream.readline()
            if not line:
                if started:
                    raise IncompleteRecordError(
                        "FASTQ stream ended before the quality line"
                        + (f" of {header!r}" if header is not None else "")
                    )
                return None

            line = line.strip()
            if not line:
                continue
            started = True

            if in_quality:
                quality = "".join(line.split())
                sequence = "".join(letters)
                if len(quality) != len(sequence):
                    raise ProtocolError(
                        f"Sequence/quality length mismatch for {header!r}: "
                        f"{len(sequence)} letters, {len(quality)} scores"
                    )
                try:
                    scores = quality_to_phred(quality, self.encoding)
                except UnicodeEncodeError as err:
                    raise ProtocolError(
                        f"Quality line for {header!r} is not single-byte text"
                    ) from err
                seq_id, description = _parse_header(header)
                return SeqRecord(
                    id=seq_id,
                    sequence=sequence,
                    quality=scores,
                    description=description,
                    encoding=self.encoding,
                )

            if line.startswith(HEADER_PREFIX):
                header = line[len(HEADER_PREFIX):]
                letters = []
            elif line.startswith(QUALITY_PREFIX):
                if header is None:
                    raise ProtocolError("No header line parsed before '+' line")
                repeated = line[len(QUALITY_PREFIX):]
                if repeated and repeated not in (header, _parse_header(header)[0]):
                    raise ProtocolError(
                        f"Quality header {repeated!r} does not match "
                        f"sequence header {header!r}"
                    )
                in_quality = True
            else:
                letters.append("".join(line.split()))


class FastqWriter(SequenceWriter):
    """
    Writes FASTQ records one at a time.

    Args:
        sink: Path or open text stream
        encoding: Quality encoding to emit. If None, each record's own
            preferred encoding is used, falling back to Sanger.
        repeat_header: Repeat the header text on the '+' line
    """

    def __init__(
        self,
        sink: PathOrStream,
        encoding: Optional[QualityEncoding] = None,
        repeat_header: bool = False
    ):
        super().__init__(sink)
        self.encoding = encoding
        self.repeat_header = repeat_header

    def write(self, record: SeqRecord) -> int:
        """
        Write a single record.

        Returns:
            Number of bytes written
        """
        encoding = self.encoding or record.encoding or DEFAULT_ENCODING
        header = record.header

        n = self._emit(f"{HEADER_PREFIX}{header}\n")
        n += self._emit(record.sequence + "\n")
        if self.repeat_header:
            n += self._emit(f"{QUALITY_PREFIX}{header}\n")
        else:
            n += self._emit(QUALITY_PREFIX + "\n")
        n += self._emit(record.quality_string(encoding) + "\n")
        return n


def read_fastq(
    filepath: PathOrStream,
    uppercase: bool = True,
    encoding: QualityEncoding = DEFAULT_ENCODING
) -> Iterator[SeqRecord]:
    """
    Read sequences from a FASTQ file.

    Supports both plain text and gzip-compressed files.

    Args:
        filepath: Path to FASTQ file (.fastq, .fq, or .gz) or open stream
        uppercase: Convert sequences to uppercase
        encoding: Quality encoding of the file

    Yields:
        SeqRecord objects

    Example:
        >>> for record in read_fastq("reads.fastq.gz"):
        ...     if record.mean_quality() > 20:
        ...         print(record.id)
    """
    with FastqReader(filepath, encoding=encoding) as reader:
        for record in reader:
            if uppercase:
                record.sequence = record.sequence.upper()
            yield record


def write_fastq(
    records: Union[SeqRecord, Iterable[SeqRecord]],
    filepath: Union[str, Path],
    compress: bool = False,
    encoding: Optional[QualityEncoding] = None,
    repeat_header: bool = False
) -> int:
    """
    Write sequences to a FASTQ file.

    Args:
        records: Single record or iterable of SeqRecord objects
        filepath: Output file path
        compress: If True, write gzip-compressed file
        encoding: Quality encoding to emit (default: per record, then Sanger)
        repeat_header: Repeat the header text on the '+' line

    Returns:
        Number of bytes written

    Example:
        >>> records = [SeqRecord("read1", "ACGT", [40, 40, 40, 40])]
        >>> write_fastq(records, "output.fastq")
        19
    """
    if isinstance(records, SeqRecord):
        records = [records]

    filepath = Path(filepath)
    if compress and not filepath.suffix == ".gz":
        filepath = Path(str(filepath) + ".gz")

    with FastqWriter(
        _open_file(filepath, "wt"), encoding=encoding, repeat_header=repeat_header
    ) as writer:
        for record in records:
            writer.write(record)
        return writer.bytes_written


def filter_by_quality(
    records: Iterable[SeqRecord],
    min_mean_quality: float = 20.0,
    min_length: int = 0
) -> Iterator[SeqRecord]:
    """
    Filter FASTQ records by quality and length.

    Args:
        records: Iterable of SeqRecord objects
        min_mean_quality: Minimum mean quality score
        min_length: Minimum sequence length

    Yields:
        SeqRecord objects passing the filters
    """
    for record in records:
        if len(record) < min_length:
            continue
        if record.mean_quality() < min_mean_quality:
            continue
        yield record


def paired_end_reader(
    filepath1: PathOrStream,
    filepath2: PathOrStream,
    uppercase: bool = True,
    encoding: QualityEncoding = DEFAULT_ENCODING
) -> Iterator[Tuple[SeqRecord, SeqRecord]]:
    """
    Read paired-end FASTQ files simultaneously.

    Args:
        filepath1: Path to R1 (forward) reads
        filepath2: Path to R2 (reverse) reads
        uppercase: Convert sequences to uppercase
        encoding: Quality encoding of both files

    Yields:
        Tuples of (R1 record, R2 record)
    """
    r1_reader = read_fastq(filepath1, uppercase, encoding)
    r2_reader = read_fastq(filepath2, uppercase, encoding)

    for r1, r2 in zip(r1_reader, r2_reader):
        yield (r1, r2)
