"""
End-to-end export run.

    ExportSettings
         │
         ├─ validate ................................ ConfigError
         ├─ ExportWriter(scanner, codec).run(file) .. RetrievalError / EncodingError / SinkError
         │     (artifact deleted on failure)
         ├─ destination_key(now)
         └─ DelegatedUploader.upload(file, key) ..... CredentialError / TransferError

Steps run strictly in order; the upload never starts unless the writer
reached DONE. Errors propagate unchanged to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from dynexport.config import ExportSettings
from dynexport.delivery import DelegatedUploader, RoleCredentialProvider, destination_key
from dynexport.errors import SinkError
from dynexport.execution.writer import ExportWriter
from dynexport.storage.codec import CsvCodec
from dynexport.storage.dynamodb import DynamoDBStore
from dynexport.storage.scanner import KeyValueStore, PaginatedScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    record_count: int
    bucket: str
    key: str
    artifact: Path

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


def build_uploader(settings: ExportSettings) -> DelegatedUploader:
    provider = RoleCredentialProvider(
        settings.access_key_id,
        settings.secret_access_key,
        settings.role_arn,
        region=settings.region,
        duration_seconds=settings.credential_duration_seconds,
        expiry_margin_seconds=settings.credential_margin_seconds,
    )
    return DelegatedUploader(settings.bucket, provider, region=settings.region)


def write_artifact(settings: ExportSettings, store: KeyValueStore) -> int:
    """Scan the table into settings.export_path; remove the file if anything fails."""
    scanner = PaginatedScanner(store, settings.batch_size, max_retries=settings.scan_max_retries)
    writer = ExportWriter(scanner, CsvCodec())
    path = settings.export_path

    try:
        sink = path.open("wb")
    except OSError as exc:
        raise SinkError(f"Failed to open local file {path}") from exc

    try:
        return writer.run(sink)
    except BaseException:
        path.unlink(missing_ok=True)
        raise


def run_export(
    settings: ExportSettings,
    *,
    store: Optional[KeyValueStore] = None,
    uploader: Optional[DelegatedUploader] = None,
    now: Optional[datetime] = None,
) -> ExportResult:
    """
    Export the configured table and upload it.

    Args:
        settings: Run settings
        store: Table to scan; defaults to the DynamoDB table in settings
        uploader: Delivery step; defaults to an STS/S3 uploader from settings
        now: Export instant used for the destination key

    Returns:
        ExportResult with the record count and destination
    """
    settings.validate()
    if store is None:
        store = DynamoDBStore(settings.table_name, region=settings.region)

    record_count = write_artifact(settings, store)
    logger.info("Total records written %d to local file %s", record_count, settings.export_path)

    key = destination_key(now, settings.key_prefix, settings.file_prefix)
    if uploader is None:
        uploader = build_uploader(settings)
    uploader.upload(settings.export_path, key)

    return ExportResult(
        record_count=record_count,
        bucket=settings.bucket,
        key=key,
        artifact=settings.export_path,
    )
