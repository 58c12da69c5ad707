import io
import logging

import pytest

from seqbins.errors import MalformedInputError
from seqbins.fasta import (
    SequenceRecord,
    iter_fasta_records,
    iter_sequence_lengths,
    load_fasta,
    sequence_length,
)


def test_multiline_bodies_are_concatenated():
    text = ">a first record\nACGT\nAC\n>b\nGG\n"
    records = list(iter_fasta_records(io.StringIO(text)))
    assert records == [
        SequenceRecord(identifier="a first record", sequence="ACGTAC"),
        SequenceRecord(identifier="b", sequence="GG"),
    ]
    assert records[0].accession == "a"
    assert records[0].description == "first record"
    assert records[1].description == ""


def test_empty_input_yields_no_records():
    assert list(iter_fasta_records(io.StringIO(""))) == []


def test_blank_lines_inside_body_do_not_count():
    text = ">a\nAC\n\n  \nGT\n\n"
    assert list(iter_sequence_lengths(io.StringIO(text))) == [4]


def test_header_without_identifier_is_valid():
    records = list(iter_fasta_records(io.StringIO(">\nACG\n")))
    assert records[0].identifier == ""
    assert records[0].accession == ""
    assert records[0].length == 3


def test_empty_record_has_zero_length():
    text = ">empty\n>full\nACGT\n>trailing\n"
    assert list(iter_sequence_lengths(io.StringIO(text))) == [0, 4, 0]


def test_crlf_line_endings_are_stripped():
    records = list(iter_fasta_records(io.StringIO(">a b\r\nAC\r\nGT\r\n")))
    assert records[0].identifier == "a b"
    assert records[0].sequence == "ACGT"


def test_every_character_counts():
    record = SequenceRecord(identifier="x", sequence="ac-NN*?")
    assert sequence_length(record) == 7


def test_bytes_are_decoded_and_counted_as_characters():
    lines = [b">x\n", "ÅÅ\n".encode("utf-8")]
    assert list(iter_sequence_lengths(lines)) == [2]


def test_content_before_header_is_skipped_with_warning(caplog):
    text = "stray text\nmore\n>a\nACGT\n"
    with caplog.at_level(logging.WARNING):
        lengths = list(iter_sequence_lengths(io.StringIO(text)))
    assert lengths == [4]
    assert "Skipped 2 line(s)" in caplog.text


def test_preamble_without_any_header_still_warns(caplog):
    with caplog.at_level(logging.WARNING):
        assert list(iter_fasta_records(io.StringIO("not fasta\n"))) == []
    assert "Skipped 1 line(s)" in caplog.text


def test_strict_mode_rejects_content_before_header():
    text = "\nstray\n>a\nACGT\n"
    with pytest.raises(MalformedInputError) as excinfo:
        list(iter_fasta_records(io.StringIO(text), strict=True))
    assert excinfo.value.line_number == 2
    assert isinstance(excinfo.value, ValueError)


def test_strict_mode_allows_leading_blank_lines():
    text = "\n\n>a\nAC\n"
    assert list(iter_sequence_lengths(io.StringIO(text), strict=True)) == [2]


def test_parser_is_lazy_and_propagates_read_errors():
    def failing_lines():
        yield ">a\n"
        yield "ACGT\n"
        yield ">b\n"
        raise OSError("disk went away")

    records = iter_fasta_records(failing_lines())
    assert next(records).length == 4
    with pytest.raises(OSError, match="disk went away"):
        next(records)


def test_load_fasta_returns_dataframe(tmp_path):
    path = tmp_path / "proteins.fasta"
    path.write_text(">P1 kinase\nMKT\nAA\n>P2\nM\n")
    df = load_fasta(path)
    assert list(df.columns) == ["identifier", "accession", "description", "length"]
    assert df["accession"].tolist() == ["P1", "P2"]
    assert df["length"].tolist() == [5, 1]


def test_load_fasta_empty_file(tmp_path):
    path = tmp_path / "empty.fa"
    path.write_text("")
    df = load_fasta(path)
    assert df.empty
    assert "length" in df.columns
