"""AWS Lambda entry point."""

import logging
from typing import Any, Dict

from dynexport.config import ExportSettings
from dynexport.execution.pipeline import run_export

logger = logging.getLogger(__name__)


def handle_request(event: Any = None, context: Any = None) -> Dict[str, Any]:
    # Errors propagate so Lambda records the invocation as failed
    result = run_export(ExportSettings.from_env())
    logger.info("Successfully uploaded DynamoDB file to %s", result.uri)
    return {"record_count": result.record_count, "bucket": result.bucket, "key": result.key}
