"""
Tests for reading an export artifact back.
"""

import pytest

from dynexport.execution.writer import ExportWriter
from dynexport.storage.codec import CsvCodec
from dynexport.storage.reader import CsvArtifactReader
from dynexport.storage.scanner import PaginatedScanner


@pytest.fixture
def artifact(tmp_path, make_store):
    def _write(count=0, items=None, batch_size=10):
        path = tmp_path / "dynamo.csv"
        store = make_store(count, items=items)
        with path.open("wb") as sink:
            ExportWriter(PaginatedScanner(store, batch_size), CsvCodec()).run(sink)
        return path, store

    return _write


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CsvArtifactReader(tmp_path / "nope.csv")


def test_iter_records_matches_table(artifact):
    path, store = artifact(count=45)
    records = list(CsvArtifactReader(path).iter_records())
    assert records == [(i["UUID"], i["Customer"]) for i in store.items]


def test_values_survive_file_round_trip(artifact):
    items = [
        {"UUID": "a,1", "Customer": 'quote " here'},
        {"UUID": "b2", "Customer": "multi\nline"},
        {"UUID": "c3", "Customer": "NA"},
    ]
    path, _ = artifact(items=items, batch_size=2)
    assert list(CsvArtifactReader(path).iter_records()) == [
        ("a,1", 'quote " here'),
        ("b2", "multi\nline"),
        ("c3", "NA"),
    ]


def test_to_dataframe(artifact):
    path, _ = artifact(count=12)
    df = CsvArtifactReader(path).to_dataframe()
    assert list(df.columns) == ["UUID", "Customer"]
    assert len(df) == 12
    assert df.iloc[0]["UUID"] == "id-00000"


def test_header_only_artifact_is_empty_table(artifact):
    path, _ = artifact(count=0)
    table = CsvArtifactReader(path).to_table()
    assert table.column_names == ["UUID", "Customer"]
    assert table.num_rows == 0
