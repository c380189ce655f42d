"""
Genomic file I/O.

This module provides streaming readers and writers for:
- FASTA: Sequence storage format
- FASTQ: Sequence + quality scores (NGS data)

and an adapter that reads or writes whole collections of records
through any of them.
"""

from seqstream.io.errors import (
    SeqIOError,
    ProtocolError,
    IncompleteRecordError,
    UnsupportedOperation,
)

from seqstream.io.base import SequenceReader, SequenceWriter

from seqstream.io.fasta import (
    FastaReader,
    FastaWriter,
    read_fasta,
    write_fasta,
    parse_fasta_string,
    load_fasta_dict,
)

from seqstream.io.fastq import (
    FastqReader,
    FastqWriter,
    read_fastq,
    write_fastq,
    filter_by_quality,
    paired_end_reader,
)

from seqstream.io.alignio import (
    Alignment,
    AlignmentReader,
    AlignmentWriter,
    read_alignment,
    write_alignment,
)

__all__ = [
    "SeqIOError",
    "ProtocolError",
    "IncompleteRecordError",
    "UnsupportedOperation",
    "SequenceReader",
    "SequenceWriter",
    "FastaReader",
    "FastaWriter",
    "read_fasta",
    "write_fasta",
    "parse_fasta_string",
    "load_fasta_dict",
    "FastqReader",
    "FastqWriter",
    "read_fastq",
    "write_fastq",
    "filter_by_quality",
    "paired_end_reader",
    "Alignment",
    "AlignmentReader",
    "AlignmentWriter",
    "read_alignment",
    "write_alignment",
]
