import io

import pytest

from seqstream.io import (
    Alignment,
    AlignmentReader,
    AlignmentWriter,
    FastaReader,
    FastaWriter,
    FastqReader,
    FastqWriter,
    IncompleteRecordError,
    ProtocolError,
    read_alignment,
    write_alignment,
)
from seqstream.sequence import SeqRecord


def test_read_empty_stream():
    alignment = read_alignment(FastaReader(io.StringIO("")))
    assert len(alignment) == 0
    assert list(alignment) == []


def test_read_preserves_order():
    reader = FastaReader(io.StringIO(">b\nTT\n>a\nACGT\n>b\nG\n"))
    alignment = AlignmentReader(reader).read()
    assert alignment.ids() == ["b", "a", "b"]
    assert alignment.lengths() == [2, 4, 1]


def test_read_fastq():
    text = "@r1\nAC\n+\nII\n@r2\nGGT\n+\n###\n"
    alignment = read_alignment(FastqReader(io.StringIO(text)))
    assert alignment.ids() == ["r1", "r2"]
    assert alignment[1].quality.tolist() == [2, 2, 2]


def test_protocol_error_aborts_read():
    text = "@r1\nAC\n+\nII\n@r2\nAC\n+x\nII\n"
    with pytest.raises(ProtocolError):
        read_alignment(FastqReader(io.StringIO(text)))


def test_truncated_record_aborts_read():
    text = "@r1\nAC\n+\nII\n@r2\nAC\n"
    with pytest.raises(IncompleteRecordError):
        read_alignment(FastqReader(io.StringIO(text)))


def test_write_counts_all_records():
    alignment = Alignment([SeqRecord("a", "ACGT"), SeqRecord("b", "GG")])
    out = io.StringIO()
    n = AlignmentWriter(FastaWriter(out)).write(alignment)
    assert out.getvalue() == ">a\nACGT\n>b\nGG\n"
    assert n == len(out.getvalue())


def test_write_error_aborts(failing_stream):
    alignment = Alignment([
        SeqRecord("a", "AC", [1, 2]),
        SeqRecord("b", "GG", [3, 4]),
    ])
    writer = FastqWriter(failing_stream(limit=5))
    with pytest.raises(OSError):
        write_alignment(alignment, writer)
    assert writer.bytes_written == len("@a\nAC\n+\n\"#\n@b\n")


def test_fastq_round_trip():
    alignment = Alignment([
        SeqRecord("a", "ACGT", [40, 30, 20, 10], "x"),
        SeqRecord("b", "G", [0]),
    ])
    out = io.StringIO()
    write_alignment(alignment, FastqWriter(out))
    assert read_alignment(FastqReader(io.StringIO(out.getvalue()))) == alignment


def test_alignment_helpers():
    alignment = Alignment()
    alignment.add(SeqRecord("a", "AC-T"))
    alignment.extend([SeqRecord("b", "ACGT"), SeqRecord("c", "A")])
    assert len(alignment) == 3
    assert not alignment.is_aligned()
    assert alignment[:2].is_aligned()
    assert alignment.to_dict() == {"a": "AC-T", "b": "ACGT", "c": "A"}
    assert repr(alignment) == "Alignment(3 records)"
    assert Alignment().is_aligned()


def test_write_error_keeps_count_for_this_call(failing_stream):
    writer = FastqWriter(failing_stream(limit=6))
    writer.write(SeqRecord("x", "A", [0]))
    adapter = AlignmentWriter(writer)
    alignment = Alignment([
        SeqRecord("a", "AC", [1, 2]),
        SeqRecord("b", "GG", [3, 4]),
    ])
    with pytest.raises(OSError):
        adapter.write(alignment)
    assert adapter.bytes_written == len("@a\nAC\n")
    assert writer.bytes_written == len("@x\nA\n+\n!\n@a\nAC\n")


def test_write_count_is_per_call():
    writer = FastaWriter(io.StringIO())
    adapter = AlignmentWriter(writer)
    assert adapter.write([SeqRecord("a", "ACGT")]) == 8
    assert adapter.write([SeqRecord("b", "GG")]) == 6
    assert adapter.bytes_written == 6
    assert writer.bytes_written == 14
