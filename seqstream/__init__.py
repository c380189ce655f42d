"""
seqstream: Streaming FASTA/FASTQ I/O

This package provides tools for:
- Reading and writing FASTA and FASTQ records one at a time
- Decoding and encoding quality scores across platform encodings
- Reading and writing whole collections of records

Quality scores are held as NumPy arrays of Phred values.
"""

__version__ = "0.1.0"
__author__ = "seqstream Contributors"

from seqstream.sequence import (
    SeqRecord,
    QualityEncoding,
    quality_to_phred,
    phred_to_quality,
)

from seqstream.io import (
    FastaReader,
    FastaWriter,
    FastqReader,
    FastqWriter,
    Alignment,
    read_alignment,
    write_alignment,
    read_fasta,
    read_fastq,
    write_fasta,
    write_fastq,
    ProtocolError,
    IncompleteRecordError,
    UnsupportedOperation,
)

__all__ = [
    # Sequence values
    "SeqRecord",
    "QualityEncoding",
    "quality_to_phred",
    "phred_to_quality",
    # Record I/O
    "FastaReader",
    "FastaWriter",
    "FastqReader",
    "FastqWriter",
    "read_fasta",
    "read_fastq",
    "write_fasta",
    "write_fastq",
    # Collections
    "Alignment",
    "read_alignment",
    "write_alignment",
    # Errors
    "ProtocolError",
    "IncompleteRecordError",
    "UnsupportedOperation",
]
