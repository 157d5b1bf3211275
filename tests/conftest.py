"""
Shared test fixtures.

The Supabase double below keeps rows per table in memory and applies
filters, inserts and updates, so a migration can be run end to end and
its effects read back.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

# Settings require these at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import copy
import pytest
from unittest.mock import patch
from datetime import datetime, timezone
from typing import Generator, Optional
from uuid import uuid4


# ===================
# MOCK SUPABASE CLIENT
# ===================

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Chainable query builder that runs against MockSupabaseClient storage
    when execute() is called.
    """

    def __init__(self, client: "MockSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._op = "select"
        self._payload = None
        self._filters = []
        self._order = []
        self._range = None
        self._limit = None

    # Operations

    def select(self, *columns, count: Optional[str] = None):
        self._op = "select"
        return self

    def insert(self, data):
        self._op = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._op = "update"
        self._payload = data
        return self

    def delete(self):
        self._op = "delete"
        return self

    # Filters and modifiers

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc: bool = False):
        self._order.append((column, desc))
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def limit(self, count):
        self._limit = count
        return self

    # Execution

    def _matches(self, row: dict) -> bool:
        return all(f(row) for f in self._filters)

    def execute(self) -> MockSupabaseResponse:
        self._client._record(self._table, self._op)
        rows = self._client._tables.setdefault(self._table, [])

        if self._op == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in items:
                row = {"id": str(uuid4()), "created_at": _now(), "updated_at": _now()}
                row.update(copy.deepcopy(item))
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return MockSupabaseResponse(data=inserted)

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
                row["updated_at"] = _now()
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        if self._op == "delete":
            self._client._tables[self._table] = [r for r in rows if not self._matches(r)]
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        # Stable sorts applied last-key-first give multi-column ordering
        for column, desc in reversed(self._order):
            matched.sort(key=lambda r: str(r.get(column) or ""), reverse=desc)

        count = len(matched)
        if self._range is not None:
            start, end = self._range
            matched = matched[start:end + 1]
        if self._limit is not None:
            matched = matched[:self._limit]

        return MockSupabaseResponse(data=copy.deepcopy(matched), count=count)


class MockSupabaseTable(MockSupabaseQuery):
    """Mock Supabase table; each table() call starts a fresh query."""


class MockSupabaseClient:
    """In-memory Supabase client."""

    def __init__(self):
        self._tables: dict[str, list[dict]] = {}
        self._failures: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Replace a table's rows."""
        self._tables[table_name] = copy.deepcopy(data)

    def get_table_data(self, table_name: str) -> list[dict]:
        """Current rows of a table."""
        return copy.deepcopy(self._tables.get(table_name, []))

    def fail_on(self, table_name: str, operation: str, error: Optional[Exception] = None):
        """Make every `operation` on `table_name` raise."""
        self._failures[(table_name, operation)] = error or Exception(
            f"{operation} on {table_name} failed"
        )

    def _record(self, table_name: str, operation: str):
        self.calls.append((table_name, operation))
        error = self._failures.get((table_name, operation))
        if error:
            raise error

    def table(self, name: str) -> MockSupabaseTable:
        """Start a query on a table."""
        return MockSupabaseTable(self, name)


# ===================
# FIXTURES
# ===================

SERVICE_MODULES = [
    "services.material_service",
    "services.unit_of_measure_service",
    "services.category_service",
    "services.base_product_service",
    "services.product_variant_service",
]

SINGLETONS = [
    ("services.material_service", "_material_service"),
    ("services.unit_of_measure_service", "_unit_of_measure_service"),
    ("services.category_service", "_category_service"),
    ("services.base_product_service", "_base_product_service"),
    ("services.product_variant_service", "_product_variant_service"),
    ("services.migration_service", "_migration_service"),
]


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create an in-memory Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("materials", [
                {"id": "1", "name": "Steel Pipe", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with the in-memory mock.

    Service singletons are reset so get_*_service() builds fresh
    instances on the mock and the originals come back afterwards.
    """
    import importlib
    from contextlib import ExitStack

    with ExitStack() as stack:
        stack.enter_context(
            patch("config.database.get_supabase_client", return_value=mock_supabase)
        )
        for module in SERVICE_MODULES:
            importlib.import_module(module)
            stack.enter_context(
                patch(f"{module}.get_supabase_client", return_value=mock_supabase)
            )
        for module, attr in SINGLETONS:
            stack.enter_context(
                patch.object(importlib.import_module(module), attr, None)
            )
        yield mock_supabase


@pytest.fixture
def sample_material_data() -> dict:
    """A valid legacy material."""
    return {
        "id": "11111111-1111-1111-1111-111111111111",
        "name": "Steel Pipe",
        "description": "Galvanized steel pipe",
        "category_id": None,
        "unit_type": "kg",
        "unit_value": 2.5,
        "stock_quantity": 100,
        "usage_notes": "Keep dry",
        "photos": '["https://cdn.example.com/pipe-1.jpg", "https://cdn.example.com/pipe-2.jpg"]',
        "dynamic_properties": '{"diameter_mm": 50, "coated": true, "finish": {"type": "zinc"}}',
        "created_at": "2025-01-01T10:00:00+00:00",
    }


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    Create FastAPI test client with mocked database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("materials", [...])
            response = test_client_with_mock_db.post(...)
    """
    from fastapi.testclient import TestClient
    from main import app

    yield TestClient(app)
