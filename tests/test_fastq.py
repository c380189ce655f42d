import io

import numpy as np
import pytest

from seqstream.io import (
    FastqReader,
    FastqWriter,
    IncompleteRecordError,
    ProtocolError,
    UnsupportedOperation,
    filter_by_quality,
    paired_end_reader,
    read_fastq,
    write_fastq,
)
from seqstream.sequence import QualityEncoding, SeqRecord


def reader_for(text, **kwargs):
    return FastqReader(io.StringIO(text), **kwargs)


def test_read_single_record():
    reader = reader_for("@id desc\nACGT\n+\n!!!!\n")
    record = reader.read()
    assert record.id == "id"
    assert record.description == "desc"
    assert record.sequence == "ACGT"
    np.testing.assert_array_equal(record.quality, [0, 0, 0, 0])
    assert record.encoding is QualityEncoding.SANGER
    assert reader.read() is None


def test_header_without_description():
    record = reader_for("@read1\nAC\n+\nII\n").read()
    assert record.id == "read1"
    assert record.description == ""


def test_description_split_at_first_whitespace_run():
    record = reader_for("@read1 \t lane 1 tile 2\nAC\n+\nII\n").read()
    assert record.description == "lane 1 tile 2"


def test_mismatched_separator_header():
    with pytest.raises(ProtocolError):
        reader_for("@id\nACGT\n+other\n!!!!\n").read()


def test_separator_may_repeat_header():
    assert reader_for("@id\nAC\n+id\nII\n").read().id == "id"
    assert reader_for("@id lane\nAC\n+id lane\nII\n").read().id == "id"


def test_separator_before_header():
    with pytest.raises(ProtocolError):
        reader_for("ACGT\n+\n!!!!\n").read()


def test_short_quality_line():
    with pytest.raises(ProtocolError):
        reader_for("@id\nACGT\n+\n!!\n").read()


def test_protocol_error_is_value_error():
    with pytest.raises(ValueError):
        reader_for("@id\nACGT\n+\n!!\n").read()


def test_multi_line_quality_is_rejected():
    with pytest.raises(ProtocolError):
        reader_for("@id\nACGT\n+\nII\nII\n").read()


def test_sequence_lines_are_joined():
    record = reader_for("@id\nAC\nG T\n+\nIIII\n").read()
    assert record.sequence == "ACGT"


def test_new_header_restarts_record():
    record = reader_for("@first\nAAAA\n@second\nCC\n+\nII\n").read()
    assert record.id == "second"
    assert record.sequence == "CC"


def test_blank_lines_are_skipped():
    reader = reader_for("\n\n@a\n\nAC\n\n+\n\nII\n\n\n")
    assert reader.read().sequence == "AC"
    assert reader.read() is None


def test_quality_line_may_start_with_header_marker():
    record = reader_for("@a\nAC\n+\n@I\n").read()
    np.testing.assert_array_equal(record.quality, [31, 40])


def test_end_of_stream_inside_record():
    reader = reader_for("@a\nACGT\n+\n")
    with pytest.raises(IncompleteRecordError):
        reader.read()


def test_incomplete_record_is_eof_error():
    with pytest.raises(EOFError):
        reader_for("@a\nACGT\n").read()


def test_empty_stream():
    assert reader_for("").read() is None
    assert reader_for("\n\n").read() is None


def test_raw_quality_codes_without_encoding():
    for encoding in (None, QualityEncoding.NONE):
        record = reader_for("@a\nAC\n+\n!I\n", encoding=encoding).read()
        np.testing.assert_array_equal(record.quality, [33, 73])


def test_illumina_input():
    record = reader_for("@a\nAC\n+\n@h\n", encoding=QualityEncoding.ILLUMINA_1_3).read()
    np.testing.assert_array_equal(record.quality, [0, 40])


def test_iteration():
    text = "@a\nAC\n+\nII\n@b\nGG\n+\n##\n"
    assert [record.id for record in reader_for(text)] == ["a", "b"]


def test_rewind():
    reader = reader_for("@a\nAC\n+\nII\n@b\nGG\n+\n##\n")
    assert reader.read().id == "a"
    reader.rewind()
    assert reader.read().id == "a"
    assert reader.read().id == "b"


def test_rewind_non_seekable(non_seekable):
    reader = FastqReader(non_seekable("@a\nAC\n+\nII\n@b\nGG\n+\n##\n"))
    assert reader.read().id == "a"
    with pytest.raises(UnsupportedOperation):
        reader.rewind()
    assert reader.read().id == "b"


def test_write_record():
    out = io.StringIO()
    writer = FastqWriter(out)
    n = writer.write(SeqRecord("id", "ACGT", [0, 0, 0, 0], "desc"))
    assert out.getvalue() == "@id desc\nACGT\n+\n!!!!\n"
    assert n == 21
    assert writer.bytes_written == 21


def test_write_repeats_header():
    out = io.StringIO()
    FastqWriter(out, repeat_header=True).write(SeqRecord("id", "AC", [40, 40], "desc"))
    assert out.getvalue() == "@id desc\nAC\n+id desc\nII\n"


def test_write_uses_record_encoding_unless_overridden():
    record = SeqRecord("id", "A", [0], encoding=QualityEncoding.ILLUMINA_1_3)
    out = io.StringIO()
    FastqWriter(out).write(record)
    assert out.getvalue().splitlines()[3] == "@"

    out = io.StringIO()
    FastqWriter(out, encoding=QualityEncoding.SANGER).write(record)
    assert out.getvalue().splitlines()[3] == "!"


def test_write_without_quality():
    out = io.StringIO()
    FastqWriter(out).write(SeqRecord("id", "ACG"))
    assert out.getvalue() == "@id\nACG\n+\n!!!\n"


def test_write_error_stops_record(failing_stream):
    sink = failing_stream(limit=2)
    writer = FastqWriter(sink)
    with pytest.raises(OSError):
        writer.write(SeqRecord("id", "ACGT", [0, 0, 0, 0]))
    assert writer.bytes_written == len("@id\nACGT\n")
    assert sink.getvalue() == "@id\nACGT\n"


def test_round_trip():
    records = [
        SeqRecord("r1", "ACGTN", [0, 10, 20, 30, 40], "lane=1"),
        SeqRecord("r2", "GG", [93, 5]),
    ]
    out = io.StringIO()
    writer = FastqWriter(out)
    for record in records:
        writer.write(record)
    assert list(reader_for(out.getvalue())) == records


def test_round_trip_solexa():
    record = SeqRecord("r1", "ACGT", [10, 20, 30, 40], encoding=QualityEncoding.SOLEXA)
    out = io.StringIO()
    FastqWriter(out).write(record)
    parsed = reader_for(out.getvalue(), encoding=QualityEncoding.SOLEXA).read()
    np.testing.assert_array_equal(parsed.quality, record.quality)


def test_close_flushes_and_closes():
    out = io.StringIO()
    writer = FastqWriter(out)
    writer.write(SeqRecord("id", "A", [0]))
    writer.close()
    assert out.closed
    assert writer.closed
    writer.close()


def test_file_round_trip(tmp_path):
    records = [SeqRecord("r1", "ACGT", [30, 30, 20, 10]), SeqRecord("r2", "TT", [2, 3])]
    path = tmp_path / "reads.fastq"
    n = write_fastq(records, path, compress=True)
    assert n > 0
    assert list(read_fastq(str(path) + ".gz")) == records


def test_read_fastq_uppercase(tmp_path):
    path = tmp_path / "reads.fq"
    path.write_text("@r1\nacgt\n+\nIIII\n")
    assert next(read_fastq(path)).sequence == "ACGT"
    assert next(read_fastq(path, uppercase=False)).sequence == "acgt"


def test_filter_by_quality():
    records = [
        SeqRecord("good", "ACGT", [30, 30, 30, 30]),
        SeqRecord("bad", "ACGT", [5, 5, 5, 5]),
        SeqRecord("short", "A", [40]),
    ]
    kept = filter_by_quality(records, min_mean_quality=20, min_length=2)
    assert [record.id for record in kept] == ["good"]


def test_paired_end_reader():
    r1 = io.StringIO("@p1/1\nAC\n+\nII\n@p2/1\nGG\n+\nII\n")
    r2 = io.StringIO("@p1/2\nTT\n+\nII\n@p2/2\nCC\n+\nII\n")
    pairs = [(a.id, b.id) for a, b in paired_end_reader(r1, r2)]
    assert pairs == [("p1/1", "p1/2"), ("p2/1", "p2/2")]


def test_quality_wider_than_a_byte():
    with pytest.raises(ProtocolError):
        reader_for("@a\nA\n+\n€\n").read()


def test_write_counts_encoded_bytes():
    raw = io.BytesIO()
    writer = FastqWriter(io.TextIOWrapper(raw, encoding="utf-8"))
    n = writer.write(SeqRecord("a", "A", [0], "café"))
    writer.flush()
    assert n == len(raw.getvalue()) == 15
    assert writer.bytes_written == 15


def test_close_releases_stream_when_flush_fails(failing_flush_stream):
    sink = failing_flush_stream()
    writer = FastqWriter(sink)
    writer.write(SeqRecord("id", "A", [0]))
    with pytest.raises(OSError):
        writer.close()
    assert sink.closed
    assert writer.closed
