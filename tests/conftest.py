"""
tests.conftest

In-process fakes for the Spanner admin and data-plane handles.

Responsibilities:
- Record create-database requests and simulate operation outcomes.
- Keep committed rows per table so seeded data can be read back.
- Count snapshot checkouts/releases to verify cursor cleanup.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pytest
import structlog


class FakeOperation:
    def __init__(self, error: BaseException | None = None) -> None:
        self._error = error
        self.waited = 0

    def result(self, timeout: float | None = None) -> Any:
        self.waited += 1
        if self._error is not None:
            raise self._error
        return object()


class FakeTransport:
    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


class FakeAdmin:
    def __init__(
        self,
        *,
        call_error: BaseException | None = None,
        wait_error: BaseException | None = None,
    ) -> None:
        self.requests: list[Any] = []
        self.operations: list[FakeOperation] = []
        self.transport = FakeTransport()
        self._call_error = call_error
        self._wait_error = wait_error

    def create_database(self, *, request: Any) -> FakeOperation:
        self.requests.append(request)
        if self._call_error is not None:
            raise self._call_error
        op = FakeOperation(self._wait_error)
        self.operations.append(op)
        return op


class FakeBatch:
    def __init__(self, db: FakeDatabase) -> None:
        self._db = db
        self.mutations: list[tuple[str, tuple[str, ...], list[tuple]]] = []

    def insert_or_update(self, *, table: str, columns: tuple[str, ...], values: list[tuple]) -> None:
        self.mutations.append((table, columns, list(values)))

    def __enter__(self) -> FakeBatch:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is not None:
            return
        # Commit is all-or-nothing: a configured failure leaves every table untouched.
        for table, _, _ in self.mutations:
            if table in self._db.fail_tables:
                raise self._db.fail_tables[table]
        for table, columns, rows in self.mutations:
            stored = self._db.tables.setdefault(table, {})
            key_len = 1 if table == "Singers" else 2
            for row in rows:
                stored[tuple(row[:key_len])] = dict(zip(columns, row))
        self._db.commits += 1


class FakeSnapshot:
    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def execute_sql(self, sql: str) -> Iterator[list[Any]]:
        self._db.queries.append(sql)
        if self._db.query_error is not None:
            raise self._db.query_error
        return self._stream()

    def _stream(self) -> Iterator[list[Any]]:
        rows = self._db.rows_override
        if rows is None:
            rows = [
                [r["SingerId"], r["AlbumId"], r["AlbumTitle"]]
                for r in self._db.tables.get("Albums", {}).values()
            ]
        for i, row in enumerate(rows):
            if self._db.stream_error is not None and i == self._db.stream_error_after:
                raise self._db.stream_error
            yield row
        if self._db.stream_error is not None and self._db.stream_error_after >= len(rows):
            raise self._db.stream_error


class FakeSnapshotCheckout:
    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def __enter__(self) -> FakeSnapshot:
        self._db.snapshot_checkouts += 1
        return FakeSnapshot(self._db)

    def __exit__(self, *exc: object) -> None:
        self._db.snapshot_releases += 1


class FakeDatabase:
    def __init__(self) -> None:
        self.database_id: str | None = None
        self.pool: Any = None
        self.tables: dict[str, dict[tuple, dict[str, Any]]] = {}
        self.batches: list[FakeBatch] = []
        self.fail_tables: dict[str, BaseException] = {}
        self.commits = 0

        self.queries: list[str] = []
        self.rows_override: list[list[Any]] | None = None
        self.query_error: BaseException | None = None
        self.stream_error: BaseException | None = None
        self.stream_error_after = 0
        self.snapshot_checkouts = 0
        self.snapshot_releases = 0

    def batch(self) -> FakeBatch:
        b = FakeBatch(self)
        self.batches.append(b)
        return b

    def snapshot(self) -> FakeSnapshotCheckout:
        return FakeSnapshotCheckout(self)

    def batch_tables(self) -> list[str]:
        return [m[0] for b in self.batches for m in b.mutations]


class FakePool:
    def __init__(self, error: BaseException | None = None) -> None:
        self.cleared = 0
        self._error = error

    def clear(self) -> None:
        self.cleared += 1
        if self._error is not None:
            raise self._error


class FakeInstance:
    def __init__(self, client: FakeSpannerClient, instance_id: str) -> None:
        self._client = client
        self.instance_id = instance_id

    def database(self, database_id: str, pool: Any = None) -> FakeDatabase:
        if self._client.database_error is not None:
            raise self._client.database_error
        db = FakeDatabase()
        db.database_id = database_id
        db.pool = pool
        return db


class FakeSpannerClient:
    """Stands in for `google.cloud.spanner.Client`."""

    def __init__(
        self,
        project: str | None = None,
        *,
        database_error: BaseException | None = None,
        close_error: BaseException | None = None,
    ) -> None:
        self.project = project
        self.database_admin_api = FakeAdmin()
        self.database_error = database_error
        self._close_error = close_error
        self.instances: list[FakeInstance] = []
        self.closed = 0

    def instance(self, instance_id: str) -> FakeInstance:
        inst = FakeInstance(self, instance_id)
        self.instances.append(inst)
        return inst

    def close(self) -> None:
        self.closed += 1
        if self._close_error is not None:
            raise self._close_error


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    for h in [h for h in root.handlers if h.get_name() == "spanner_seed"]:
        root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture
def fake_admin() -> FakeAdmin:
    return FakeAdmin()


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def log() -> structlog.stdlib.BoundLogger:
    return structlog.get_logger("tests")
