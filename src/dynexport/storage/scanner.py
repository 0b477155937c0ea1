"""
Paginated full-table scanner.

================================================================================
DATA FLOW - TABLE TO BATCHES
================================================================================

The scanner walks an unbounded key-value table one bounded page at a time:

    cursor = None  (start of table)

    scan_page(limit=B, cursor=None)     -> items[0:B],   cursor=k(B-1)
    scan_page(limit=B, cursor=k(B-1))   -> items[B:2B],  cursor=k(2B-1)
    scan_page(limit=B, cursor=k(2B-1))  -> items[2B:M],  cursor=None   (done)

Each page becomes one Batch of Records. The store reports "no more items" by
returning no continuation cursor; a page shorter than the limit with no cursor
is the last one. A table whose size is a multiple of B ends with one empty
terminal page:

    M=250, B=100  ->  [100] [100] [50, done]
    M=200, B=100  ->  [100] [100] [0, done]
    M=0,   B=100  ->  [0, done]

STREAM LIFECYCLE
--------------------------------------------------------------------------------
open() returns a fresh ScanStream starting at the beginning of the table. A
stream is lazy, finite and single-use: once a batch with done=True has been
returned, further next() calls raise. Only the stream sees the cursor.

FAILURES
--------------------------------------------------------------------------------
A failed page raises RetrievalError and leaves the cursor where it was. With
max_retries > 0 the same page is requested again from that cursor; the
default (0) surfaces the first failure.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional, Protocol, Tuple

from dynexport.errors import ConfigError, RetrievalError
from dynexport.schema import EXPORT_SCHEMA, Record, Schema

logger = logging.getLogger(__name__)

Cursor = Any


class KeyValueStore(Protocol):
    """A table that can be read one page at a time."""

    def scan_page(
        self, limit: int, cursor: Optional[Cursor]
    ) -> Tuple[List[Mapping[str, Any]], Optional[Cursor]]:
        """
        Return up to `limit` items after `cursor` and the cursor to resume from.

        The returned cursor is None once the table is exhausted.
        Implementations raise RetrievalError on failure.
        """
        ...


@dataclass(frozen=True)
class Batch:
    """One page of records. `done` marks the final page of a scan."""

    records: Tuple[Record, ...]
    done: bool

    def __len__(self) -> int:
        return len(self.records)


def validate_batch_size(batch_size: Any) -> int:
    """Return batch_size if it is a positive int, else raise ConfigError."""
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise ConfigError(f"Batch size must be a positive integer, got {batch_size!r}")
    if batch_size <= 0:
        raise ConfigError(f"Batch size must be a positive integer, got {batch_size}")
    return batch_size


class ScanStream:
    """Cursor-tracking iterator over one full-table scan."""

    def __init__(self, store: KeyValueStore, batch_size: int, schema: Schema, max_retries: int):
        self._store = store
        self._batch_size = batch_size
        self._schema = schema
        self._max_retries = max_retries
        self._cursor: Optional[Cursor] = None
        self._done = False
        self.pages_fetched = 0

    @property
    def done(self) -> bool:
        return self._done

    def next(self) -> Batch:
        """
        Fetch the next page.

        Returns:
            Batch of at most batch_size records; done=True on the last one

        Raises:
            RetrievalError: if the page could not be fetched
            EncodingError: if an item does not match the schema
            RuntimeError: if the stream already returned its last batch
        """
        if self._done:
            raise RuntimeError("Scan stream is exhausted; open a new stream to rescan")

        items, next_cursor = self._fetch()
        self.pages_fetched += 1

        records = tuple(self._schema.record_from_item(item) for item in items)
        if len(records) > self._batch_size:
            raise RetrievalError(
                f"Store returned {len(records)} items for a page of {self._batch_size}"
            )

        self._cursor = next_cursor
        self._done = next_cursor is None
        logger.debug(
            "Fetched page %d: %d records (done=%s)", self.pages_fetched, len(records), self._done
        )
        return Batch(records=records, done=self._done)

    def _fetch(self) -> Tuple[List[Mapping[str, Any]], Optional[Cursor]]:
        attempt = 0
        while True:
            try:
                return self._store.scan_page(self._batch_size, self._cursor)
            except RetrievalError as exc:
                if attempt >= self._max_retries:
                    raise
                attempt += 1
                logger.warning(
                    "Page %d failed (%s); retry %d/%d from last cursor",
                    self.pages_fetched + 1,
                    exc,
                    attempt,
                    self._max_retries,
                )

    def __iter__(self) -> Iterator[Batch]:
        """Yield non-empty batches until the scan is done."""
        while not self._done:
            batch = self.next()
            if batch.records:
                yield batch


class PaginatedScanner:
    """
    Full-table scanner over a KeyValueStore.

    Example:
        >>> scanner = PaginatedScanner(store, batch_size=100)
        >>> for batch in scanner.open():
        ...     handle(batch.records)
    """

    def __init__(
        self,
        store: KeyValueStore,
        batch_size: int,
        schema: Schema = EXPORT_SCHEMA,
        max_retries: int = 0,
    ):
        self.batch_size = validate_batch_size(batch_size)
        if isinstance(max_retries, bool) or not isinstance(max_retries, int) or max_retries < 0:
            raise ConfigError(f"max_retries must be a non-negative integer, got {max_retries!r}")
        self.store = store
        self.schema = schema
        self.max_retries = max_retries

    def open(self) -> ScanStream:
        """Start a new scan at the beginning of the table."""
        return ScanStream(self.store, self.batch_size, self.schema, self.max_retries)
