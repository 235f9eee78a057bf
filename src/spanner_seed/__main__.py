"""
spanner_seed.__main__

Entrypoint for `python -m spanner_seed` (and the `spanner-seed` console script).

Responsibilities:
- Load settings and configure structured logging.
- Acquire the admin and data-plane handles and always release them.
- Be the only place where a failed step terminates the process.
"""

from __future__ import annotations

from typing import NoReturn

import structlog

from spanner_seed.db.clients import open_clients
from spanner_seed.identifiers import parse_database_id
from spanner_seed.observability.logging import configure_logging, get_logger
from spanner_seed.results import StepError
from spanner_seed.settings import Settings, get_settings
from spanner_seed.workflow import RunContext, run

log = get_logger(__name__)


def _fatal(err: StepError, db: str) -> NoReturn:
    log.critical(
        err.step, db=db, kind=str(err.kind), error=err.message, exc_info=err.cause
    )
    raise SystemExit(1)


def main(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, fmt=settings.log_format
    )
    structlog.contextvars.bind_contextvars(db=settings.database)

    parsed = parse_database_id(settings.database)
    if parsed.error is not None:
        _fatal(parsed.error, settings.database)
    db_id = parsed.unwrap()

    opened = open_clients(db_id)
    if opened.error is not None:
        _fatal(opened.error, settings.database)

    with opened.unwrap() as clients:
        result = run(
            RunContext(db_id=db_id, admin=clients.admin, database=clients.database, log=log)
        )
    if result.error is not None:
        _fatal(result.error, settings.database)


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Handles are closed before the fatal log line is written, so an aborted run never
# leaves sessions checked out on the server.
