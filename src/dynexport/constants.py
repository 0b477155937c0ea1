"""
Shared defaults for dynexport.
"""

# Scan page size used when a caller does not pass one explicitly
DEFAULT_BATCH_SIZE = 100

# Local artifact written by the export before upload
DEFAULT_EXPORT_PATH = "/tmp/dynamo.csv"

# Destination key: {key_prefix}/{YYYY}/{MM}/{DD}/{file_prefix}_{YYYYMMDDHHMMSS}.csv
DEFAULT_KEY_PREFIX = "dynamo"
DEFAULT_FILE_PREFIX = "TT"
KEY_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Delegated (assumed-role) credential lifetime
CREDENTIAL_DURATION_SECONDS = 60 * 60
CREDENTIAL_EXPIRY_MARGIN_SECONDS = 30
ROLE_SESSION_NAME = "dynexport"

# Upload attributes
ARTIFACT_CONTENT_TYPE = "text/csv"
ARTIFACT_ACL = "private"
