"""
Export writer: scanner -> codec -> sink.

================================================================================
STATE MACHINE
================================================================================

    INIT ──run()──> SCANNING ──scan exhausted──> DONE
                       │  ▲
                       │  └── FETCH -> ENCODE -> APPEND (one batch at a time)
                       │
                       └──any error──> FAILED (terminal, error re-raised)

Only one batch is held at a time: the writer fetches a page, encodes it and
appends the bytes to the sink before asking for the next page. peak_in_flight
records the largest batch seen, which is bounded by the scan batch size.

HEADER
------
The first encode call of a run passes include_header=True, every later call
False. Empty terminal pages are skipped. If the table had no records at all
the header is written on its own, so every artifact is a valid CSV document.

SINK
----
Any binary file-like object. On DONE the sink is flushed and closed; on
FAILED it is closed and left for the caller to discard.
"""

import enum
import logging
from typing import BinaryIO

from dynexport.errors import SinkError
from dynexport.storage.codec import CsvCodec
from dynexport.storage.scanner import PaginatedScanner

logger = logging.getLogger(__name__)


class WriterState(enum.Enum):
    INIT = "init"
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


class ExportWriter:
    """
    Drives one scan through the codec into a sink.

    Example:
        >>> writer = ExportWriter(PaginatedScanner(store, 100), CsvCodec())
        >>> with open("/tmp/dynamo.csv", "wb") as sink:
        ...     count = writer.run(sink)
    """

    def __init__(self, scanner: PaginatedScanner, codec: CsvCodec):
        self.scanner = scanner
        self.codec = codec
        self.state = WriterState.INIT
        self.record_count = 0
        self.batch_count = 0
        self.peak_in_flight = 0

    def run(self, sink: BinaryIO) -> int:
        """
        Export the whole table into sink.

        Returns:
            Total number of records written

        Raises:
            RetrievalError, EncodingError, SinkError: the writer is FAILED
        """
        if self.state is not WriterState.INIT:
            raise RuntimeError(f"ExportWriter already ran (state={self.state.value})")

        self.state = WriterState.SCANNING
        logger.info("Scanning table in batches of %d", self.scanner.batch_size)
        try:
            header_written = False
            for batch in self.scanner.open():
                self.peak_in_flight = max(self.peak_in_flight, len(batch))
                self._append(sink, self.codec.encode(batch.records, include_header=not header_written))
                header_written = True
                self.record_count += len(batch)
                self.batch_count += 1

            if not header_written:
                self._append(sink, self.codec.encode([], include_header=True))

            self._close(sink, flush=True)
        except BaseException:
            self.state = WriterState.FAILED
            self._close(sink, flush=False)
            raise

        self.state = WriterState.DONE
        logger.info(
            "Total records written %d in %d batches", self.record_count, self.batch_count
        )
        return self.record_count

    @staticmethod
    def _append(sink: BinaryIO, data: bytes) -> None:
        try:
            sink.write(data)
        except OSError as exc:
            raise SinkError("Failed to write export artifact") from exc

    @staticmethod
    def _close(sink: BinaryIO, flush: bool) -> None:
        try:
            if flush:
                sink.flush()
            sink.close()
        except OSError as exc:
            if flush:
                raise SinkError("Failed to flush export artifact") from exc
            logger.debug("Ignoring close error on failed sink: %s", exc)
