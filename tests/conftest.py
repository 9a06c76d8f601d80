"""
pytest configuration and shared fixtures for GemsAI i18n tests.

FakeSupabase implements the slice of the supabase-py query interface the
query builder uses, over in-memory tables, and records every query and RPC
so tests can assert on what was sent.
"""

import copy
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.i18n.query_builder import I18nQueryBuilder  # noqa: E402


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Chainable query over one in-memory table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.calls: list[tuple] = []
        self.action = "select"
        self.payload = None
        self.on_conflict = None
        db.queries.append(self)

    def _add(self, *call):
        self.calls.append(call)
        return self

    def select(self, *columns, count=None):
        return self._add("select", columns)

    def eq(self, column, value):
        return self._add("eq", column, value)

    def neq(self, column, value):
        return self._add("neq", column, value)

    def in_(self, column, values):
        return self._add("in", column, list(values))

    def ilike(self, column, pattern):
        return self._add("ilike", column, pattern)

    def or_(self, filters):
        return self._add("or", filters)

    def text_search(self, column, query, options=None):
        return self._add("fts", column, query, options or {})

    def order(self, column, desc=False):
        return self._add("order", column, desc)

    def range(self, start, end):
        return self._add("range", start, end)

    def limit(self, size):
        return self._add("limit", size)

    def upsert(self, row, on_conflict=None):
        self.action = "upsert"
        self.payload = row
        self.on_conflict = on_conflict
        return self

    def insert(self, row):
        self.action = "insert"
        self.payload = row
        return self

    def find(self, name):
        """All recorded calls of one kind."""
        return [call for call in self.calls if call[0] == name]

    # --- evaluation -------------------------------------------------------

    @staticmethod
    def _ilike(value, pattern):
        needle = pattern.strip("%").casefold()
        return needle in str(value or "").casefold()

    def _matches(self, row):
        for call in self.calls:
            kind = call[0]
            if kind == "eq" and row.get(call[1]) != call[2]:
                return False
            if kind == "neq" and row.get(call[1]) == call[2]:
                return False
            if kind == "in" and row.get(call[1]) not in call[2]:
                return False
            if kind == "ilike" and not self._ilike(row.get(call[1]), call[2]):
                return False
            if kind == "or":
                conditions = [c.split(".", 2) for c in call[1].split(",")]
                if not any(self._ilike(row.get(col), pat) for col, _, pat in conditions):
                    return False
            if kind == "fts":
                text = str(row.get(call[1]) or "").casefold()
                if not all(word.casefold() in text for word in call[2].split()):
                    return False
        return True

    def _write(self):
        rows = self.db.tables.setdefault(self.table, [])
        stored = []
        for item in self.payload if isinstance(self.payload, list) else [self.payload]:
            item = dict(item)
            keys = self.on_conflict.split(",") if self.on_conflict else None
            if keys:
                rows[:] = [r for r in rows if any(r.get(k) != item.get(k) for k in keys)]
            rows.append(item)
            stored.append(copy.deepcopy(item))
        return FakeResponse(stored)

    def execute(self):
        error = self.db.errors.get(self.table)
        if error is not None:
            raise error
        if self.action in ("upsert", "insert"):
            return self._write()

        rows = [copy.deepcopy(r) for r in self.db.tables.get(self.table, []) if self._matches(r)]
        for _, column, desc in reversed(self.find("order")):
            rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        for _, start, end in self.find("range"):
            rows = rows[start : end + 1]
        for _, size in self.find("limit"):
            rows = rows[:size]
        return FakeResponse(rows, count=len(rows))


class FakeRpc:
    def __init__(self, result):
        self.result = result

    def execute(self):
        if isinstance(self.result, Exception):
            raise self.result
        return FakeResponse(self.result)


class FakeSupabase:
    """
    In-memory stand-in for supabase.Client.

    Attributes:
        tables: table/view name -> list of row dicts
        errors: table name -> exception raised on execute()
        rpc_results: function name -> return value, exception, or callable(params)
        queries: every FakeQuery created, in order
        rpc_calls: (function name, params) for every RPC
    """

    def __init__(self, tables=None):
        self.tables = tables or {}
        self.errors = {}
        self.rpc_results = {}
        self.queries: list[FakeQuery] = []
        self.rpc_calls: list[tuple] = []

    def table(self, name):
        return FakeQuery(self, name)

    from_ = table

    def rpc(self, fn, params=None):
        self.rpc_calls.append((fn, params or {}))
        result = self.rpc_results.get(fn)
        if callable(result):
            result = result(params or {})
        return FakeRpc(result)

    def queries_for(self, table):
        return [q for q in self.queries if q.table == table]


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def builder(fake_db):
    return I18nQueryBuilder("he", client=fake_db)


@pytest.fixture(autouse=True)
def clear_translation_cache():
    I18nQueryBuilder.clear_cache()
    yield
    I18nQueryBuilder.clear_cache()
