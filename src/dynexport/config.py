"""
Export settings.

Settings are read once, validated, and passed to each component explicitly.

Environment variables:

    VT_REGION           region of the table and the bucket      (required)
    AWS_TABLE           DynamoDB table to export                (required)
    BATCH_SIZE          scan page size, positive integer        (required)
    AWS_ACCESS          primary access key id                   (required)
    AWS_SECRET          primary secret access key               (required)
    AWS_ROLE            role ARN assumed for the upload         (required)
    AWS_BUCKET          destination bucket                      (required)
    EXPORT_PATH         local artifact path                     (/tmp/dynamo.csv)
    EXPORT_KEY_PREFIX   leading key segment                     (dynamo)
    EXPORT_FILE_PREFIX  object file name prefix                 (TT)
    SCAN_MAX_RETRIES    retries per failed scan page            (0)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dynexport.constants import (
    CREDENTIAL_DURATION_SECONDS,
    CREDENTIAL_EXPIRY_MARGIN_SECONDS,
    DEFAULT_EXPORT_PATH,
    DEFAULT_FILE_PREFIX,
    DEFAULT_KEY_PREFIX,
)
from dynexport.errors import ConfigError
from dynexport.storage.scanner import validate_batch_size


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ExportSettings:
    region: str
    table_name: str
    batch_size: int
    access_key_id: str
    secret_access_key: str = field(repr=False)
    role_arn: str
    bucket: str
    export_path: Path = Path(DEFAULT_EXPORT_PATH)
    key_prefix: str = DEFAULT_KEY_PREFIX
    file_prefix: str = DEFAULT_FILE_PREFIX
    scan_max_retries: int = 0
    credential_duration_seconds: int = CREDENTIAL_DURATION_SECONDS
    credential_margin_seconds: int = CREDENTIAL_EXPIRY_MARGIN_SECONDS

    def validate(self) -> "ExportSettings":
        """Raise ConfigError for the first missing or invalid setting."""
        required = {
            "region": self.region,
            "table_name": self.table_name,
            "access_key_id": self.access_key_id,
            "secret_access_key": self.secret_access_key,
            "role_arn": self.role_arn,
            "bucket": self.bucket,
            "key_prefix": self.key_prefix.strip("/"),
            "file_prefix": self.file_prefix,
        }
        for name, value in required.items():
            if not value:
                raise ConfigError(f"Missing required setting: {name}")

        validate_batch_size(self.batch_size)
        if self.scan_max_retries < 0:
            raise ConfigError(f"scan_max_retries must be >= 0, got {self.scan_max_retries}")
        if self.credential_duration_seconds <= self.credential_margin_seconds:
            raise ConfigError("Credential duration must exceed the expiry margin")
        if "/" in self.file_prefix:
            raise ConfigError(f"file_prefix must not contain '/', got {self.file_prefix!r}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExportSettings":
        """Build and validate settings from environment variables."""
        env = os.environ if environ is None else environ

        raw_batch = env.get("BATCH_SIZE", "").strip()
        if not raw_batch:
            raise ConfigError("Missing required setting: BATCH_SIZE")

        settings = cls(
            region=env.get("VT_REGION", "").strip(),
            table_name=env.get("AWS_TABLE", "").strip(),
            batch_size=_parse_int("BATCH_SIZE", raw_batch),
            access_key_id=env.get("AWS_ACCESS", "").strip(),
            secret_access_key=env.get("AWS_SECRET", "").strip(),
            role_arn=env.get("AWS_ROLE", "").strip(),
            bucket=env.get("AWS_BUCKET", "").strip(),
            export_path=Path(env.get("EXPORT_PATH") or DEFAULT_EXPORT_PATH),
            key_prefix=env.get("EXPORT_KEY_PREFIX") or DEFAULT_KEY_PREFIX,
            file_prefix=env.get("EXPORT_FILE_PREFIX") or DEFAULT_FILE_PREFIX,
            scan_max_retries=_parse_int("SCAN_MAX_RETRIES", env.get("SCAN_MAX_RETRIES") or "0"),
        )
        return settings.validate()
