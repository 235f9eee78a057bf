"""
spanner_seed.identifiers

Database resource identifier parsing.

Responsibilities:
- Split `<parent>/databases/<name>` into its parent path and database name.
- Derive project and instance ids from the parent path for the data-plane client.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from spanner_seed.results import ErrorKind, Result, failure, success

# Always fullmatch: "." excludes newlines, so a trailing "\n" never parses.
_DATABASE_RE = re.compile(r"(.*)/databases/(.*)")
_INSTANCE_RE = re.compile(r"projects/([^/\n]+)/instances/([^/\n]+)")


@dataclass(frozen=True, slots=True)
class DatabaseId:
    parent: str
    name: str

    @property
    def path(self) -> str:
        return f"{self.parent}/databases/{self.name}"

    def instance_ids(self) -> tuple[str, str] | None:
        """Return `(project, instance)` when the parent is an instance path."""
        m = _INSTANCE_RE.fullmatch(self.parent)
        if m is None:
            return None
        return m.group(1), m.group(2)


def parse_database_id(value: str) -> Result[DatabaseId]:
    m = _DATABASE_RE.fullmatch(value)
    if m is None:
        return failure(ErrorKind.invalid_identifier, "parse id", f"invalid database id {value!r}")
    return success(DatabaseId(parent=m.group(1), name=m.group(2)))
