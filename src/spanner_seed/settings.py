"""
spanner_seed.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Hold the target database resource identifier (defaults to the demo target).
- Provide logging controls for the entry point.
- Offer a cached settings instance for the composition root.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE = "projects/create-table-test/instances/test-instance/databases/example-db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SPANNER_SEED_", case_sensitive=False)

    service_name: str = "spanner-seed"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Fully qualified target: projects/<project>/instances/<instance>/databases/<database>
    database: str = Field(default=DEFAULT_DATABASE, min_length=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Deploying engineers edit DEFAULT_DATABASE (or export SPANNER_SEED_DATABASE) to
# point the demo at their own instance.
