"""
spanner_seed.db.clients

Spanner admin + data-plane handle management.

Responsibilities:
- Open the database-administration client and the data-plane database handle.
- Release both handles unconditionally, whichever step failed.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import spanner

from spanner_seed.identifiers import DatabaseId
from spanner_seed.results import ErrorKind, Result, failure, success


@dataclass(slots=True)
class SpannerClients:
    """
    Owns the two long-lived handles. Operations receive `admin` / `database`
    directly so tests can pass fakes without building a SpannerClients.
    """

    admin: Any
    database: Any
    data_client: Any = None
    pool: Any = None

    def close(self) -> None:
        # Every handle is released even if an earlier close raises.
        with ExitStack() as stack:
            if self.data_client is not None:
                stack.callback(self.data_client.close)
            if self.pool is not None:
                stack.callback(self.pool.clear)
            stack.callback(self.admin.transport.close)

    def __enter__(self) -> SpannerClients:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_clients(db_id: DatabaseId) -> Result[SpannerClients]:
    ids = db_id.instance_ids()
    if ids is None:
        return failure(
            ErrorKind.invalid_identifier,
            "create client",
            f"parent {db_id.parent!r} is not projects/<project>/instances/<instance>",
        )
    project, instance_id = ids

    with ExitStack() as cleanup:
        try:
            data_client = spanner.Client(project=project)
            cleanup.callback(data_client.close)
            # Shares credentials and SPANNER_EMULATOR_HOST with the data client.
            admin = data_client.database_admin_api
            cleanup.callback(admin.transport.close)
            # Explicit pool so close() can delete server-side sessions.
            pool = spanner.BurstyPool()
            database = data_client.instance(instance_id).database(db_id.name, pool=pool)
        except (auth_exceptions.GoogleAuthError, api_exceptions.GoogleAPIError) as e:
            return failure(ErrorKind.client, "create client", str(e), e)
        cleanup.pop_all()

    return success(
        SpannerClients(admin=admin, database=database, data_client=data_client, pool=pool)
    )


# --- Module Notes -----------------------------------------------------------
# Handles opened before a construction failure are closed before the failure is
# returned; on success ownership passes to SpannerClients.
