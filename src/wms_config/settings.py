"""Settings of the identity service.

Values come from, highest priority first:

- the process environment,
- the file named by ``WMS_ENV_FILE`` (relative paths resolve against the
  project root),
- ``config/.env.dev`` for local work, then ``config/.env`` for deployments,
- the defaults declared on ``Settings``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "WMS_ENV_FILE"
ENV_FILE_CANDIDATES = (".env.dev", ".env")


def _project_root() -> Path:
    """Nearest ancestor holding a ``config`` dir or a ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / "pyproject.toml").is_file():
            return candidate
    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        if path.exists():
            return path

    for name in ENV_FILE_CANDIDATES:
        path = get_config_dir() / name
        if path.exists():
            return path
    return None


class Settings(BaseSettings):
    """Typed configuration; field names map to upper-case env variables."""

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "WMS Identity"
    debug: bool = False

    # Store
    database_url: str = "sqlite+aiosqlite:///./data/wms.db"
    database_echo: bool = False

    # bcrypt work factor for stored passwords
    password_hash_rounds: int = 12

    # Built-in system user
    system_user_name: str = "system"
    system_role_name: str = "ROLE_SYSTEM"
    system_role_description: str = "Super users role"

    log_level: str = "INFO"

    @field_validator("password_hash_rounds")
    @classmethod
    def _validate_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:  # noqa: PLR2004
            msg = f"password_hash_rounds must be between 4 and 31, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("system_user_name", "system_role_name")
    @classmethod
    def _validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            msg = "Value cannot be blank"
            raise ValueError(msg)
        return v.strip()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings()


def clear_settings_cache() -> None:
    """Force the next ``get_settings`` call to reload (tests change the env)."""
    get_settings.cache_clear()
