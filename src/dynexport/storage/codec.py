"""
CSV codec for export batches.

================================================================================
ENCODING
================================================================================

A Batch (list of Record tuples) is turned into an Arrow RecordBatch using the
export schema and written with pyarrow's CSV writer:

    [("a1", "acme"), ("b2", 'say "hi", bye')]

        include_header=True            include_header=False
        ---------------------------    ---------------------------
        "UUID","Customer"              "a1","acme"
        "a1","acme"                    "b2","say ""hi"", bye"
        "b2","say ""hi"", bye"

Every value is quoted (quoting_style="all_valid"), embedded quotes are
doubled, commas and newlines stay inside the quotes. The codec holds no state
between calls; whoever drives it decides when the header goes out.

================================================================================
DECODING
================================================================================

decode() parses the same text back with every column read as a string and
newlines allowed inside quoted values, so decode(encode(batch)) == batch.
"""

from typing import List, Sequence

import pyarrow as pa
import pyarrow.csv as pacsv

from dynexport.errors import EncodingError
from dynexport.schema import EXPORT_SCHEMA, Record, Schema


class CsvCodec:
    """
    Stateless Record <-> CSV converter.

    Example:
        >>> codec = CsvCodec()
        >>> data = codec.encode([("a1", "acme")], include_header=True)
        >>> codec.decode(data)
        [('a1', 'acme')]
    """

    def __init__(self, schema: Schema = EXPORT_SCHEMA, delimiter: str = ","):
        self.schema = schema
        self.delimiter = delimiter
        self._arrow_schema = schema.to_arrow()

    def encode(self, batch: Sequence[Record], include_header: bool) -> bytes:
        """
        Encode a batch of records as CSV rows.

        Args:
            batch: Records in schema field order
            include_header: Emit the header row before the data rows

        Returns:
            UTF-8 CSV text; empty bytes for an empty batch without header

        Raises:
            EncodingError: if any record does not match the schema
        """
        for record in batch:
            self.schema.validate_record(record)

        if not batch and not include_header:
            return b""

        columns = [
            pa.array([record[i] for record in batch], type=field.type)
            for i, field in enumerate(self._arrow_schema)
        ]
        record_batch = pa.RecordBatch.from_arrays(columns, schema=self._arrow_schema)

        options = pacsv.WriteOptions(
            include_header=include_header,
            delimiter=self.delimiter,
            quoting_style="all_valid",
        )
        sink = pa.BufferOutputStream()
        try:
            pacsv.write_csv(record_batch, sink, write_options=options)
        except (pa.ArrowInvalid, pa.ArrowTypeError) as exc:
            raise EncodingError("Failed to write CSV rows") from exc
        return sink.getvalue().to_pybytes()

    def decode(self, data: bytes, has_header: bool = True) -> List[Record]:
        """
        Parse CSV text produced by encode() back into records.

        Args:
            data: CSV bytes
            has_header: Whether the first row is the header
        """
        if not data:
            return []
        table = pacsv.read_csv(pa.BufferReader(data), **self.read_options(has_header))
        return [tuple(row[name] for name in self.schema.field_names) for row in table.to_pylist()]

    def read_options(self, has_header: bool = True) -> dict:
        """Keyword arguments for pyarrow.csv readers matching this codec's output."""
        names = self.schema.field_names
        read_options = pacsv.ReadOptions(
            column_names=None if has_header else names,
        )
        parse_options = pacsv.ParseOptions(
            delimiter=self.delimiter,
            newlines_in_values=True,
        )
        convert_options = pacsv.ConvertOptions(
            column_types={name: self._arrow_schema.field(name).type for name in names},
            include_columns=names,
            strings_can_be_null=False,
            quoted_strings_can_be_null=False,
        )
        return {
            "read_options": read_options,
            "parse_options": parse_options,
            "convert_options": convert_options,
        }
