"""
Whole-collection reading and writing on top of single-record readers.

An Alignment here is simply an ordered set of records in read order;
no column validation is done and record lengths may differ.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Union

from seqstream.io.base import SequenceReader, SequenceWriter
from seqstream.sequence.record import SeqRecord


class Alignment:
    """
    Ordered collection of sequence records.

    Example:
        >>> aln = Alignment([SeqRecord("a", "ACGT"), SeqRecord("b", "AC-T")])
        >>> aln.ids()
        ['a', 'b']
        >>> aln.is_aligned()
        True
    """

    def __init__(self, records: Optional[Iterable[SeqRecord]] = None):
        self._records: List[SeqRecord] = list(records) if records is not None else []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SeqRecord]:
        return iter(self._records)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return Alignment(self._records[index])
        return self._records[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Alignment):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"Alignment({len(self)} records)"

    def add(self, record: SeqRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[SeqRecord]) -> None:
        self._records.extend(records)

    def ids(self) -> List[str]:
        return [record.id for record in self._records]

    def lengths(self) -> List[int]:
        return [len(record) for record in self._records]

    def is_aligned(self) -> bool:
        """True if every record has the same length."""
        return len(set(self.lengths())) <= 1

    def to_dict(self) -> Dict[str, str]:
        """Map IDs to sequences. Later records win on duplicate IDs."""
        return {record.id: record.sequence for record in self._records}


class AlignmentReader:
    """Reads every remaining record from a single-record reader."""

    def __init__(self, reader: SequenceReader):
        self.reader = reader

    def read(self) -> Alignment:
        """
        Read records until the wrapped reader is exhausted.

        Any error from the wrapped reader propagates and the records
        collected so far are discarded.
        """
        alignment = Alignment()
        while True:
            record = self.reader.read()
            if record is None:
                return alignment
            alignment.add(record)


class AlignmentWriter:
    """
    Writes every record of an alignment through a single-record writer.

    ``bytes_written`` holds the byte count of the most recent ``write()``
    call, including the records written before a failure.
    """

    def __init__(self, writer: SequenceWriter):
        self.writer = writer
        self.bytes_written = 0

    def write(self, alignment: Iterable[SeqRecord]) -> int:
        """
        Write records in order.

        Returns:
            Total number of bytes written

        The first write error propagates; the bytes written by this call
        up to the failure remain available as ``bytes_written``.
        """
        start = self.writer.bytes_written
        self.bytes_written = 0
        try:
            for record in alignment:
                self.writer.write(record)
        finally:
            self.bytes_written = self.writer.bytes_written - start
        return self.bytes_written


def read_alignment(reader: SequenceReader) -> Alignment:
    """Read all remaining records from ``reader`` into an Alignment."""
    return AlignmentReader(reader).read()


def write_alignment(alignment: Iterable[SeqRecord], writer: SequenceWriter) -> int:
    """Write all records of ``alignment`` through ``writer``."""
    return AlignmentWriter(writer).write(alignment)
