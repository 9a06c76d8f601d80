"""
Offline stand-in for the Supabase client.

Used when no Supabase credentials are configured so the service can still
start: every read returns no rows and every write or RPC fails with a
DEMO_MODE error, which the query builder turns into key fallbacks.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import SupabaseError


@dataclass
class DemoResponse:
    """Mimics postgrest's APIResponse."""

    data: Any = field(default_factory=list)
    count: Optional[int] = None


def _demo_error(action: str) -> SupabaseError:
    return SupabaseError(
        message=f"Demo mode: {action} is not available without Supabase credentials",
        code="DEMO_MODE",
    )


class DemoQuery:
    """Read-only query builder that accepts any filter and finds nothing."""

    def __init__(self, table: str):
        self.table = table
        self.filters: list[tuple] = []

    def _record(self, *args) -> "DemoQuery":
        self.filters.append(args)
        return self

    def select(self, *columns, count: Optional[str] = None) -> "DemoQuery":
        return self._record("select", columns)

    def eq(self, column: str, value: Any) -> "DemoQuery":
        return self._record("eq", column, value)

    def neq(self, column: str, value: Any) -> "DemoQuery":
        return self._record("neq", column, value)

    def in_(self, column: str, values: list) -> "DemoQuery":
        return self._record("in", column, list(values))

    def ilike(self, column: str, pattern: str) -> "DemoQuery":
        return self._record("ilike", column, pattern)

    def or_(self, filters: str) -> "DemoQuery":
        return self._record("or", filters)

    def text_search(self, column: str, query: str, options: Optional[dict] = None):
        return self._record("fts", column, query)

    def order(self, column: str, desc: bool = False) -> "DemoQuery":
        return self._record("order", column, desc)

    def range(self, start: int, end: int) -> "DemoQuery":
        return self._record("range", start, end)

    def limit(self, size: int) -> "DemoQuery":
        return self._record("limit", size)

    def insert(self, *args, **kwargs):
        raise _demo_error(f"insert into '{self.table}'")

    def upsert(self, *args, **kwargs):
        raise _demo_error(f"upsert into '{self.table}'")

    def update(self, *args, **kwargs):
        raise _demo_error(f"update of '{self.table}'")

    def delete(self, *args, **kwargs):
        raise _demo_error(f"delete from '{self.table}'")

    def execute(self) -> DemoResponse:
        return DemoResponse(data=[], count=0)


class DemoClient:
    """Client with the subset of the supabase.Client surface we use."""

    is_demo = True

    def __init__(self, language_id: str = "he"):
        self.language_id = language_id

    def table(self, name: str) -> DemoQuery:
        return DemoQuery(name)

    # supabase-py exposes both spellings
    from_ = table

    def rpc(self, fn: str, params: Optional[dict] = None):
        raise _demo_error(f"rpc '{fn}'")
