"""
Tests for the CSV codec.

Covers:
1. Header emitted only when requested, always first
2. Quoting of every value
3. Round trip for values containing delimiters, quotes and newlines
4. Schema mismatch fails the encode
"""

import csv
import io

import pytest

from dynexport.errors import EncodingError
from dynexport.storage.codec import CsvCodec

TRICKY = [
    ("a1", "plain"),
    ("b,2", "comma, inside"),
    ("c3", 'say "hi"'),
    ("d4", "line one\nline two"),
    ("e5", ""),
    ("f6", "NULL"),
    ("g7", "ümlaut ✓"),
    ("h8", '",\n"'),
]


@pytest.fixture
def codec():
    return CsvCodec()


class TestEncode:
    def test_header_first_when_requested(self, codec):
        data = codec.encode([("a1", "acme")], include_header=True)
        assert data.splitlines()[0] == b'"UUID","Customer"'
        assert data.count(b'"UUID","Customer"') == 1

    def test_no_header_when_not_requested(self, codec):
        data = codec.encode([("a1", "acme")], include_header=False)
        assert b"UUID" not in data
        assert data == b'"a1","acme"\n'

    def test_every_value_quoted(self, codec):
        data = codec.encode([("a1", "acme"), ("b2", "")], include_header=False)
        assert data.splitlines() == [b'"a1","acme"', b'"b2",""']

    def test_embedded_quotes_doubled(self, codec):
        data = codec.encode([("c3", 'say "hi"')], include_header=False)
        assert data == b'"c3","say ""hi"""\n'

    def test_empty_batch_with_header_is_header_only(self, codec):
        assert codec.encode([], include_header=True).splitlines() == [b'"UUID","Customer"']

    def test_empty_batch_without_header_is_empty(self, codec):
        assert codec.encode([], include_header=False) == b""

    def test_output_parses_with_stdlib_csv(self, codec):
        data = codec.encode(TRICKY, include_header=True)
        rows = list(csv.reader(io.StringIO(data.decode("utf-8"), newline="")))
        assert rows[0] == ["UUID", "Customer"]
        assert [tuple(row) for row in rows[1:]] == TRICKY

    @pytest.mark.parametrize(
        "bad",
        [("a1",), ("a1", "acme", "extra"), ("a1", None), ("a1", 3)],
    )
    def test_schema_mismatch_fails_whole_batch(self, codec, bad):
        with pytest.raises(EncodingError):
            codec.encode([("ok", "fine"), bad], include_header=True)


class TestRoundTrip:
    def test_with_header(self, codec):
        assert codec.decode(codec.encode(TRICKY, include_header=True)) == TRICKY

    def test_without_header(self, codec):
        data = codec.encode(TRICKY, include_header=False)
        assert codec.decode(data, has_header=False) == TRICKY

    def test_concatenated_batches(self, codec):
        first, second = TRICKY[:3], TRICKY[3:]
        data = codec.encode(first, include_header=True) + codec.encode(second, include_header=False)
        assert codec.decode(data) == TRICKY

    def test_header_only_decodes_to_nothing(self, codec):
        assert codec.decode(codec.encode([], include_header=True)) == []

    def test_empty_bytes(self, codec):
        assert codec.decode(b"") == []
