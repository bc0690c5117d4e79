"""
Pytest configuration.

Adds the project root to the Python path so that tests can import domain,
repositories, services and api, and replaces the Supabase client with an
in-memory double for every test so nothing reaches the network.
"""

import copy
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
from postgrest.exceptions import APIError

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import repositories.client  # noqa: E402


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """Subset of the PostgREST query builder used by the repositories."""

    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self._db = db
        self._table = table
        self._op = "select"
        self._payload: Any = None
        self._count: Optional[str] = None
        self._filters: List[Tuple[str, Any]] = []
        self._orders: List[Tuple[str, bool]] = []
        self._range: Optional[Tuple[int, int]] = None
        self._limit: Optional[int] = None

    def select(self, *columns: str, count: Optional[str] = None) -> "FakeQuery":
        self._op = "select"
        self._count = count
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = payload
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self._range = (start, end)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def _insert(self, rows: List[Dict[str, Any]]) -> FakeResponse:
        payloads = self._payload if isinstance(self._payload, list) else [self._payload]
        for column in self._db.unique_columns.get(self._table, ()):
            taken = {r.get(column) for r in rows if r.get(column) is not None}
            if any(p.get(column) in taken for p in payloads):
                raise APIError({
                    "message": f'duplicate key value violates unique constraint "{self._table}_{column}_key"',
                    "code": "23505",
                    "hint": None,
                    "details": None,
                })

        self._db.writes.append((self._table, "insert"))
        for payload in payloads:
            rows.append(copy.deepcopy(payload))
        return FakeResponse(copy.deepcopy(payloads))

    def execute(self) -> FakeResponse:
        if self._table in self._db.failing_tables:
            raise APIError({"message": "storage unavailable", "code": "503", "hint": None, "details": None})

        rows = self._db.tables.setdefault(self._table, [])

        if self._op == "insert":
            return self._insert(rows)

        matched = [r for r in rows if all(r.get(c) == v for c, v in self._filters)]

        if self._op == "update":
            self._db.writes.append((self._table, "update"))
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return FakeResponse(copy.deepcopy(matched))

        # Stable sorts applied last key first give multi-column ordering
        for column, desc in reversed(self._orders):
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        count = len(matched) if self._count else None
        if self._range is not None:
            start, end = self._range
            matched = matched[start:end + 1]
        if self._limit is not None:
            matched = matched[: self._limit]
        if self._db.max_rows is not None:
            matched = matched[: self._db.max_rows]
        return FakeResponse(copy.deepcopy(matched), count)


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.writes: List[Tuple[str, str]] = []
        self.failing_tables: Set[str] = set()
        # PostgREST max-rows; None means uncapped
        self.max_rows: Optional[int] = None
        self.unique_columns: Dict[str, Tuple[str, ...]] = {"users": ("email",)}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])


@pytest.fixture(autouse=True)
def fake_db(monkeypatch) -> FakeSupabase:
    db = FakeSupabase()
    monkeypatch.setattr(repositories.client, "_client", db)
    return db


@pytest.fixture
def lead_payload() -> Dict[str, str]:
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "project_brief": "Food delivery app with live order tracking",
        "budget": "₹25,000 - ₹50,000",
        "service_id": "android-native",
        "service_name": "Android Native App",
    }
