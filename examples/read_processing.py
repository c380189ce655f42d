#!/usr/bin/env python3
"""
Example: Read Processing with seqstream

This example demonstrates the streaming I/O of seqstream:
- Parsing FASTQ records and their quality scores
- Converting between quality encodings
- Quality trimming and filtering
- Converting reads to wrapped FASTA
- Reading a whole file into an Alignment
"""

import sys
sys.path.insert(0, '..')

from io import StringIO

from seqstream.io import (
    FastaReader,
    FastaWriter,
    FastqReader,
    FastqWriter,
    ProtocolError,
    filter_by_quality,
    read_alignment,
    write_alignment,
)
from seqstream.sequence import QualityEncoding


FASTQ_DATA = """\
@read1 sample=A
ACGTACGTACGTACGTACGT
+
IIIIIIIIIIIIIIII#%%!
@read2 sample=A
GGGCCCAAATTT
+read2 sample=A
5555555555++
@read3 sample=B
TTTTTTTT
+
!!!!!!!!
"""


def demo_parsing():
    """Demonstrate reading FASTQ records."""
    print("\n" + "=" * 60)
    print("FASTQ PARSING")
    print("=" * 60)

    with FastqReader(StringIO(FASTQ_DATA)) as reader:
        for record in reader:
            print(f"\n{record.id} ({record.description})")
            print(f"   Sequence: {record.sequence}")
            print(f"   Scores:   {record.quality.tolist()}")
            print(f"   Mean Q:   {record.mean_quality():.1f}")


def demo_encodings():
    """Demonstrate re-encoding quality scores."""
    print("\n" + "=" * 60)
    print("QUALITY ENCODINGS")
    print("=" * 60)

    with FastqReader(StringIO(FASTQ_DATA)) as reader:
        record = reader.read()

    for encoding in QualityEncoding:
        if encoding is QualityEncoding.NONE:
            continue
        print(f"   {encoding.label:<14} {record.quality_string(encoding)}")

    out = StringIO()
    writer = FastqWriter(out, encoding=QualityEncoding.ILLUMINA_1_3)
    n = writer.write(record)
    print(f"\nWrote {n} bytes as Illumina 1.3:")
    print(out.getvalue())


def demo_trimming():
    """Demonstrate quality trimming and filtering."""
    print("\n" + "=" * 60)
    print("TRIMMING AND FILTERING")
    print("=" * 60)

    with FastqReader(StringIO(FASTQ_DATA)) as reader:
        records = [record.trim_quality(min_quality=20) for record in reader]

    for record in records:
        print(f"   {record.id}: {len(record)} bp after trimming")

    passing = list(filter_by_quality(records, min_mean_quality=20, min_length=1))
    print(f"\n{len(passing)} of {len(records)} reads pass Q20")


def demo_conversion():
    """Demonstrate FASTQ to FASTA conversion through an Alignment."""
    print("\n" + "=" * 60)
    print("FASTQ -> FASTA")
    print("=" * 60)

    with FastqReader(StringIO(FASTQ_DATA)) as reader:
        reads = read_alignment(reader)

    print(f"\n{reads!r}, lengths {reads.lengths()}")

    out = StringIO()
    writer = FastaWriter(out, line_width=8)
    write_alignment(reads, writer)
    fasta = out.getvalue()
    print(fasta)

    with FastaReader(StringIO(fasta)) as reader:
        print(f"Round trip: {read_alignment(reader).to_dict()}")


def demo_errors():
    """Demonstrate malformed input handling."""
    print("\n" + "=" * 60)
    print("MALFORMED INPUT")
    print("=" * 60)

    bad = "@read1\nACGT\n+\nII\n"
    with FastqReader(StringIO(bad)) as reader:
        try:
            reader.read()
        except ProtocolError as err:
            print(f"\nProtocolError: {err}")


def main():
    print("=" * 60)
    print("seqstream Read Processing Demo")
    print("=" * 60)

    demo_parsing()
    demo_encodings()
    demo_trimming()
    demo_conversion()
    demo_errors()

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
