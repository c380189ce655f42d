"""
Sequence values and quality score encodings.

This module provides:
- The SeqRecord type produced and consumed by all readers and writers
- Named quality encoding schemes (Sanger, Solexa, Illumina)
- Conversions between quality strings and Phred scores
"""

from seqstream.sequence.quality import (
    QualityEncoding,
    DEFAULT_ENCODING,
    PHRED33_OFFSET,
    PHRED64_OFFSET,
    quality_to_phred,
    phred_to_quality,
    solexa_to_phred,
    phred_to_solexa,
)

from seqstream.sequence.record import SeqRecord

__all__ = [
    "QualityEncoding",
    "DEFAULT_ENCODING",
    "PHRED33_OFFSET",
    "PHRED64_OFFSET",
    "quality_to_phred",
    "phred_to_quality",
    "solexa_to_phred",
    "phred_to_solexa",
    "SeqRecord",
]
