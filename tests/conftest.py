from types import SimpleNamespace

import pytest


class FakeQuery:
    """Chainable stand-in for a supabase-py table query."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table_name = table
        self.calls: list[tuple[str, tuple, dict]] = []

    def _record(self, name: str, *args, **kwargs) -> "FakeQuery":
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def gte(self, *args, **kwargs):
        return self._record("gte", *args, **kwargs)

    def lt(self, *args, **kwargs):
        return self._record("lt", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def limit(self, *args, **kwargs):
        return self._record("limit", *args, **kwargs)

    def update(self, *args, **kwargs):
        return self._record("update", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def execute(self):
        self.client.executed.append(self)
        rows = list(self.client.rows.get(self.table_name, []))
        if any(name == "update" for name, _, _ in self.calls):
            # updates only return the rows their filters matched
            filters = [args for name, args, _ in self.calls if name == "eq"]
            rows = [row for row in rows if all(row.get(column) == value for column, value in filters)]
        return SimpleNamespace(data=rows)


class FakeSupabase:
    def __init__(self, rows: dict[str, list[dict]] | None = None) -> None:
        self.rows = rows or {}
        self.executed: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    from greenroute.persistence import database

    client = FakeSupabase()
    monkeypatch.setattr(database, "get_supabase_client", lambda: client)
    return client
