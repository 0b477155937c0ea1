"""
dynexport: full-table DynamoDB export to CSV, delivered to S3 under an
assumed role.
"""

from dynexport.config import ExportSettings
from dynexport.errors import (
    ConfigError,
    CredentialError,
    EncodingError,
    ExportError,
    RetrievalError,
    SinkError,
    TransferError,
)
from dynexport.execution import ExportResult, run_export

__version__ = "0.1.0"

__all__ = [
    "ExportSettings",
    "ExportResult",
    "run_export",
    "ExportError",
    "ConfigError",
    "RetrievalError",
    "EncodingError",
    "SinkError",
    "CredentialError",
    "TransferError",
]
