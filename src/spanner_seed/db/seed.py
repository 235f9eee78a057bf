"""
spanner_seed.db.seed

Seed data generation and loading.

Responsibilities:
- Generate fresh UUID identifiers for the seed rows.
- Build the fixed Singer/Album rows.
- Apply singers then albums as two independent atomic insert-or-update batches.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog
from google.api_core import exceptions as api_exceptions

from spanner_seed.db.models import Album, Singer
from spanner_seed.results import ErrorKind, Result, failure, success

SEED_ID_COUNT = 10

_SINGER_NAMES = (
    ("Marc", "Richards"),
    ("Catalina", "Smith"),
    ("Alice", "Trentor"),
    ("Lea", "Martin"),
    ("David", "Lomond"),
)

# (index of parent singer id, album title); album ids take ids[5:] in order.
_ALBUMS = (
    (0, "Total Junk"),
    (1, "Go, Go, Go"),
    (0, "Green"),
    (1, "Forever Hold Your Peace"),
    (2, "Terrified"),
)


@dataclass(frozen=True, slots=True)
class SeedData:
    ids: list[str]
    singers: list[Singer]
    albums: list[Album]


def generate_ids(
    log: structlog.stdlib.BoundLogger,
    count: int = SEED_ID_COUNT,
    *,
    factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> list[str]:
    ids: list[str] = []
    for i in range(count):
        ids.append(str(factory()))
        log.info("uuid", index=i, uuid=ids[i])
    return ids


def build_singers(ids: Sequence[str]) -> list[Singer]:
    return [
        Singer(singer_id=ids[i], first_name=first, last_name=last)
        for i, (first, last) in enumerate(_SINGER_NAMES)
    ]


def build_albums(ids: Sequence[str]) -> list[Album]:
    offset = len(_SINGER_NAMES)
    return [
        Album(singer_id=ids[parent], album_id=ids[offset + i], album_title=title)
        for i, (parent, title) in enumerate(_ALBUMS)
    ]


def apply_upserts(database: Any, table: str, columns: Sequence[str], rows: list[tuple]) -> None:
    # One batch == one commit; the batch checkout commits on clean exit.
    with database.batch() as batch:
        batch.insert_or_update(table=table, columns=tuple(columns), values=rows)


def insert_seed_data(
    database: Any,
    log: structlog.stdlib.BoundLogger,
    *,
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> Result[SeedData]:
    ids = generate_ids(log, factory=id_factory)
    singers = build_singers(ids)
    albums = build_albums(ids)

    try:
        apply_upserts(database, Singer.table, Singer.columns, [s.values() for s in singers])
    except api_exceptions.GoogleAPIError as e:
        return failure(ErrorKind.write, "insert singers", str(e), e)

    try:
        apply_upserts(database, Album.table, Album.columns, [a.values() for a in albums])
    except api_exceptions.GoogleAPIError as e:
        return failure(ErrorKind.write, "insert albums", str(e), e)

    log.info("inserted records", singers=len(singers), albums=len(albums))
    return success(SeedData(ids=ids, singers=singers, albums=albums))


# --- Module Notes -----------------------------------------------------------
# Every run mints new ids, so re-running keeps adding rows rather than upserting the
# same ones. Pass a deterministic id_factory to make the seed repeatable.
