"""
spanner_seed.db.models

Row types for the demo schema.

Responsibilities:
- Define the Singer (parent) and Album (interleaved child) records.
- Expose table/column names and row tuples for mutation building.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Singer:
    table: ClassVar[str] = "Singers"
    # SingerInfo is part of the schema but never written by the seed step.
    columns: ClassVar[tuple[str, ...]] = ("SingerId", "FirstName", "LastName")

    singer_id: str
    first_name: str
    last_name: str
    singer_info: bytes | None = None

    def values(self) -> tuple[str, str, str]:
        return (self.singer_id, self.first_name, self.last_name)


@dataclass(frozen=True, slots=True)
class Album:
    table: ClassVar[str] = "Albums"
    columns: ClassVar[tuple[str, ...]] = ("SingerId", "AlbumId", "AlbumTitle")

    singer_id: str
    album_id: str
    album_title: str

    def values(self) -> tuple[str, str, str]:
        return (self.singer_id, self.album_id, self.album_title)


# --- Module Notes -----------------------------------------------------------
# Album rows share the Singers key prefix (interleaved) and are removed with their
# parent via ON DELETE CASCADE; the application does not check this itself.
