"""
CSV artifact reader.

Reads an export artifact back for verification and downstream use.

DATA FLOW
=========

STEP 1: OPEN THE ARTIFACT
-------------------------
The artifact written by the export writer looks like:

    "UUID","Customer"
    "a1","acme"
    "b2","multi
    line"
    ...

Exactly one header row, then one quoted row per record. Values may contain
delimiters, quotes and newlines.

STEP 2: STREAM BATCHES
----------------------
pyarrow's streaming CSV reader parses the file block by block into Arrow
RecordBatches, every column typed as string, so a large artifact is never
fully materialized by iter_records().

STEP 3: CONVERT
---------------
Batches are turned into Record tuples (iter_records), a single Arrow table
(to_table) or a pandas DataFrame (to_dataframe).
"""

import logging
from pathlib import Path
from typing import Iterator, Union

import pandas as pd
import pyarrow as pa
import pyarrow.csv as pacsv

from dynexport.schema import EXPORT_SCHEMA, Record, Schema
from dynexport.storage.codec import CsvCodec

logger = logging.getLogger(__name__)


class CsvArtifactReader:
    """
    Reads an exported CSV artifact.

    Example:
        >>> reader = CsvArtifactReader("/tmp/dynamo.csv")
        >>>
        >>> # Stream all records
        >>> for record in reader.iter_records():
        ...     print(record)
        >>>
        >>> # Or load to DataFrame
        >>> df = reader.to_dataframe()
    """

    def __init__(self, path: Union[str, Path], schema: Schema = EXPORT_SCHEMA):
        """
        Initialize reader for an artifact file.

        Args:
            path: CSV file written by an export run
            schema: Schema the artifact was written with
        """
        self.path = Path(path)
        self.schema = schema
        self._codec = CsvCodec(schema)

        if not self.path.exists():
            raise FileNotFoundError(f"Export artifact not found: {path}")

    def iter_batches(self) -> Iterator[pa.RecordBatch]:
        """Stream the artifact as Arrow record batches (header excluded)."""
        with pacsv.open_csv(self.path, **self._codec.read_options()) as stream:
            for batch in stream:
                if batch.num_rows:
                    yield batch

    def iter_records(self) -> Iterator[Record]:
        """
        Stream records from the artifact.

        Yields:
            Record tuples in schema field order
        """
        names = self.schema.field_names
        for batch in self.iter_batches():
            columns = [batch.column(name).to_pylist() for name in names]
            yield from zip(*columns)

    def to_table(self) -> pa.Table:
        return pacsv.read_csv(self.path, **self._codec.read_options())

    def to_dataframe(self) -> pd.DataFrame:
        df = self.to_table().to_pandas()
        logger.debug("Loaded %d rows from %s", len(df), self.path)
        return df
