"""
spanner_seed.db.schema

Database + schema provisioning.

Responsibilities:
- Hold the fixed DDL for the Singers/Albums schema.
- Issue a single create-database request and block on its long-running operation.
"""

from __future__ import annotations

import concurrent.futures
from typing import Any

import structlog
from google.api_core import exceptions as api_exceptions
from google.cloud import spanner_admin_database_v1

from spanner_seed.identifiers import DatabaseId
from spanner_seed.results import Result, classify_admin_error, failure, success

SINGERS_DDL = """CREATE TABLE Singers (
  SingerId   STRING(1024) NOT NULL,
  FirstName  STRING(1024),
  LastName   STRING(1024),
  SingerInfo BYTES(MAX)
) PRIMARY KEY (SingerId)"""

ALBUMS_DDL = """CREATE TABLE Albums (
  SingerId     STRING(1024) NOT NULL,
  AlbumId      STRING(1024) NOT NULL,
  AlbumTitle   STRING(MAX)
) PRIMARY KEY (SingerId, AlbumId),
INTERLEAVE IN PARENT Singers ON DELETE CASCADE"""


def create_database_request(db_id: DatabaseId) -> spanner_admin_database_v1.CreateDatabaseRequest:
    return spanner_admin_database_v1.CreateDatabaseRequest(
        parent=db_id.parent,
        create_statement=f"CREATE DATABASE `{db_id.name}`",
        extra_statements=[SINGERS_DDL, ALBUMS_DDL],
    )


def create_database(
    admin: Any, db_id: DatabaseId, log: structlog.stdlib.BoundLogger
) -> Result[None]:
    """
    Create the database with both tables in one request.
    AlreadyExists may surface from the call itself or from the operation wait; both
    are reported as ALREADY_EXISTS and left to the caller to tolerate.
    """

    try:
        operation = admin.create_database(request=create_database_request(db_id))
        operation.result()
    except (api_exceptions.GoogleAPIError, concurrent.futures.TimeoutError) as e:
        return failure(classify_admin_error(e), "create database", str(e), e)

    log.info("created database", db=db_id.path)
    return success()
