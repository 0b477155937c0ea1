"""
Table access and artifact encoding.
"""

from dynexport.storage.codec import CsvCodec
from dynexport.storage.dynamodb import DynamoDBStore
from dynexport.storage.reader import CsvArtifactReader
from dynexport.storage.scanner import Batch, KeyValueStore, PaginatedScanner, ScanStream

__all__ = [
    "Batch",
    "CsvArtifactReader",
    "CsvCodec",
    "DynamoDBStore",
    "KeyValueStore",
    "PaginatedScanner",
    "ScanStream",
]
