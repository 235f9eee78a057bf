"""
spanner_seed.db.reader

Album query over a single-use read-only snapshot.

Responsibilities:
- Stream `Album` records lazily from the fixed query.
- Release the snapshot exactly once on every exit path (exhausted, errored, abandoned).
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import ExitStack
from typing import Any

import structlog
from google.api_core import exceptions as api_exceptions

from spanner_seed.db.models import Album
from spanner_seed.results import ErrorKind, Result, failure, success

QUERY = "SELECT SingerId, AlbumId, AlbumTitle FROM Albums"


class CursorState(enum.StrEnum):
    opened = "OPENED"
    iterating = "ITERATING"
    exhausted = "EXHAUSTED"
    errored = "ERRORED"
    closed = "CLOSED"


class RowDecodeError(ValueError):
    pass


def decode_album(row: Any) -> Album:
    values = list(row)
    if len(values) != 3:
        raise RowDecodeError(f"expected 3 columns, got {len(values)}")
    for v in values:
        if not isinstance(v, str):
            raise RowDecodeError(f"expected STRING column, got {type(v).__name__}")
    return Album(singer_id=values[0], album_id=values[1], album_title=values[2])


class AlbumCursor:
    """
    Lazy, non-restartable iterator over the album query.

    Use as a context manager; leaving the block closes the cursor whether the rows
    were fully consumed or not.
    """

    def __init__(self, database: Any) -> None:
        self._database = database
        self._stack = ExitStack()
        self._rows: Iterator[Any] | None = None
        self.state = CursorState.closed

    def open(self) -> AlbumCursor:
        if self._rows is not None:
            raise RuntimeError("cursor is not restartable")
        snapshot = self._stack.enter_context(self._database.snapshot())
        try:
            self._rows = iter(snapshot.execute_sql(QUERY))
        except BaseException:
            self._stack.close()
            raise
        self.state = CursorState.opened
        return self

    def __enter__(self) -> AlbumCursor:
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __iter__(self) -> AlbumCursor:
        return self

    def __next__(self) -> Album:
        if self.state not in (CursorState.opened, CursorState.iterating):
            raise StopIteration
        try:
            row = next(self._rows)  # type: ignore[arg-type]
        except StopIteration:
            self.state = CursorState.exhausted
            raise
        except Exception:
            self.state = CursorState.errored
            raise
        try:
            album = decode_album(row)
        except RowDecodeError:
            self.state = CursorState.errored
            raise
        self.state = CursorState.iterating
        return album

    def close(self) -> None:
        if self.state is CursorState.closed:
            return
        self.state = CursorState.closed
        self._stack.close()


def query_albums(database: Any, log: structlog.stdlib.BoundLogger) -> Result[list[Album]]:
    try:
        with AlbumCursor(database) as cursor:
            albums = list(cursor)
    except (api_exceptions.GoogleAPIError, RowDecodeError) as e:
        return failure(ErrorKind.read, "query records", str(e), e)

    log.debug("query complete", rows=len(albums))
    return success(albums)


# --- Module Notes -----------------------------------------------------------
# The snapshot checkout returns its session to the pool on exit; that is the
# server-side resource the cursor must always release.
