"""
Destination key layout.

    {key_prefix}/{YYYY}/{MM}/{DD}/{file_prefix}_{YYYYMMDDHHMMSS}.csv

    dynamo/2024/03/07/TT_20240307141503.csv

Date folders and the timestamp come from the same UTC instant, so a key always
sits in the folder of its own day and downstream consumers can list one day
with a single prefix.
"""

from datetime import datetime, timezone
from typing import Optional

from dynexport.constants import DEFAULT_FILE_PREFIX, DEFAULT_KEY_PREFIX, KEY_TIMESTAMP_FORMAT
from dynexport.errors import ConfigError


def destination_key(
    now: Optional[datetime] = None,
    key_prefix: str = DEFAULT_KEY_PREFIX,
    file_prefix: str = DEFAULT_FILE_PREFIX,
) -> str:
    """
    Build the time-partitioned object key for an export.

    Args:
        now: Export instant; naive values are taken as UTC. Defaults to now.
        key_prefix: Leading path segment(s)
        file_prefix: File name prefix before the timestamp
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    key_prefix = key_prefix.strip("/")
    if not key_prefix:
        raise ConfigError("key_prefix must not be empty")
    if not file_prefix or "/" in file_prefix:
        raise ConfigError(f"Invalid file_prefix: {file_prefix!r}")

    return (
        f"{key_prefix}/{now.year:04d}/{now.month:02d}/{now.day:02d}/"
        f"{file_prefix}_{now.strftime(KEY_TIMESTAMP_FORMAT)}.csv"
    )
