"""
Error taxonomy for the export pipeline.

Every error is fatal to the run. Components raise the subclass matching the
step that failed and chain the underlying cause; only the entry point turns
an ExportError into a failure exit status.

    ExportError
    ├── ConfigError       missing/invalid setting, raised before any I/O
    ├── RetrievalError    a scan page could not be fetched
    ├── EncodingError     record does not match the schema
    ├── SinkError         local artifact write/flush/close failed
    ├── CredentialError   role assumption failed or primary creds malformed
    └── TransferError     upload to the blob store failed
"""


class ExportError(Exception):
    """Base class for all export failures."""

    step = "export"

    def __str__(self) -> str:
        message = super().__str__()
        cause = self.__cause__
        if cause is not None:
            return f"{message}: {cause}"
        return message


class ConfigError(ExportError):
    step = "configure"


class RetrievalError(ExportError):
    step = "scan"


class EncodingError(ExportError):
    step = "encode"


class SinkError(ExportError):
    step = "write"


class CredentialError(ExportError):
    step = "assume-role"


class TransferError(ExportError):
    step = "upload"
