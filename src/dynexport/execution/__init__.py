"""
Export execution: the writer state machine and the end-to-end run.
"""

from dynexport.execution.pipeline import ExportResult, run_export, write_artifact
from dynexport.execution.writer import ExportWriter, WriterState

__all__ = [
    "ExportWriter",
    "WriterState",
    "ExportResult",
    "run_export",
    "write_artifact",
]
