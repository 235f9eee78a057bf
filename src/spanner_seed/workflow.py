"""
spanner_seed.workflow

Seed run sequencing.

Responsibilities:
- Provision the database (tolerating ALREADY_EXISTS), seed rows, read albums back.
- Stop at the first fatal step and hand its Result to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from spanner_seed.db.models import Album
from spanner_seed.db.reader import query_albums
from spanner_seed.db.schema import create_database
from spanner_seed.db.seed import insert_seed_data
from spanner_seed.identifiers import DatabaseId
from spanner_seed.results import ErrorKind, Result


@dataclass(frozen=True, slots=True)
class RunContext:
    """Explicit dependencies for one run: both handles plus the logger."""

    db_id: DatabaseId
    admin: Any
    database: Any
    log: structlog.stdlib.BoundLogger


def run(ctx: RunContext) -> Result[list[Album]]:
    created = create_database(ctx.admin, ctx.db_id, ctx.log)
    if created.error is not None:
        if created.error.kind is not ErrorKind.already_exists:
            return created  # type: ignore[return-value]
        ctx.log.info("database already exists", db=ctx.db_id.path)

    seeded = insert_seed_data(ctx.database, ctx.log)
    if not seeded.ok:
        return seeded  # type: ignore[return-value]

    albums = query_albums(ctx.database, ctx.log)
    if not albums.ok:
        return albums

    for a in albums.unwrap():
        ctx.log.info("row", singer_id=a.singer_id, album_id=a.album_id, album_title=a.album_title)
    return albums
