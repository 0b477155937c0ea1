"""
DynamoDB table adapter for the paginated scanner.

Maps one scan page onto a single DynamoDB Scan request:

    scan_page(limit, cursor)  ->  Table.scan(Limit=limit, ExclusiveStartKey=cursor)
    items, cursor             <-  response["Items"], response.get("LastEvaluatedKey")

DynamoDB returns a LastEvaluatedKey whenever it stopped before the end of the
table (page limit reached or 1 MB response cap), and omits it once the scan is
complete, so a missing key is the only exhaustion signal used here.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dynexport.errors import ConfigError, RetrievalError

logger = logging.getLogger(__name__)


class DynamoDBStore:
    """
    Reads a DynamoDB table page by page using the boto3 resource API.

    Items come back already deserialized (strings as str, numbers as Decimal).

    Example:
        >>> store = DynamoDBStore("customers", region="eu-west-1")
        >>> items, cursor = store.scan_page(100, None)
    """

    def __init__(
        self,
        table_name: str,
        region: Optional[str] = None,
        session: Optional[boto3.session.Session] = None,
        consistent_read: bool = False,
    ):
        if not table_name:
            raise ConfigError("empty DynamoDB table name")
        self.table_name = table_name
        self.consistent_read = consistent_read

        session = session or boto3.session.Session(region_name=region)
        self._table = session.resource("dynamodb", region_name=region).Table(table_name)
        logger.info("DynamoDB connection initialised for table %s", table_name)

    def scan_page(
        self, limit: int, cursor: Optional[Dict[str, Any]]
    ) -> Tuple[List[Mapping[str, Any]], Optional[Dict[str, Any]]]:
        kwargs: Dict[str, Any] = {"Limit": limit}
        if cursor:
            kwargs["ExclusiveStartKey"] = cursor
        if self.consistent_read:
            kwargs["ConsistentRead"] = True

        try:
            response = self._table.scan(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise RetrievalError(f"Scan of DynamoDB table {self.table_name} failed") from exc

        return response.get("Items") or [], response.get("LastEvaluatedKey")
