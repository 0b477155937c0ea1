"""
Shared fixtures: an in-memory key-value table that pages like DynamoDB.

InMemoryStore.scan_page() mirrors DynamoDB Scan with Limit: a page filled to
the limit carries a continuation cursor (even if nothing follows), a shorter
page carries none.
"""

from typing import Any, Dict, List, Mapping, Optional, Set

import pytest

from dynexport.errors import RetrievalError


class InMemoryStore:
    def __init__(self, items: List[Mapping[str, Any]], fail_on_pages: Optional[Set[int]] = None):
        self.items = list(items)
        self.fail_on_pages = set(fail_on_pages or ())
        self.calls: List[Dict[str, Any]] = []

    def scan_page(self, limit, cursor):
        call_number = len(self.calls) + 1
        self.calls.append({"limit": limit, "cursor": cursor})
        if call_number in self.fail_on_pages:
            raise RetrievalError(f"page {call_number} unavailable")

        start = 0 if cursor is None else cursor
        page = self.items[start : start + limit]
        next_cursor = start + len(page) if len(page) == limit else None
        return page, next_cursor


def customer_items(count: int) -> List[Dict[str, str]]:
    return [{"UUID": f"id-{i:05d}", "Customer": f"customer {i}"} for i in range(count)]


@pytest.fixture
def make_store():
    def _make(count: int = 0, items=None, fail_on_pages=None) -> InMemoryStore:
        if items is None:
            items = customer_items(count)
        return InMemoryStore(items, fail_on_pages=fail_on_pages)

    return _make


@pytest.fixture
def settings_env(tmp_path) -> Dict[str, str]:
    return {
        "VT_REGION": "eu-west-1",
        "AWS_TABLE": "customers",
        "BATCH_SIZE": "100",
        "AWS_ACCESS": "AKIAPRIMARY",
        "AWS_SECRET": "primary-secret",
        "AWS_ROLE": "arn:aws:iam::123456789012:role/export-upload",
        "AWS_BUCKET": "exports-bucket",
        "EXPORT_PATH": str(tmp_path / "dynamo.csv"),
    }
