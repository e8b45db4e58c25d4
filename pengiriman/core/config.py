"""
Centralized runtime configuration for the pengiriman service.

Values come from the process environment. A local `.env` file at the project
root fills in keys that are not already set, so `uvicorn pengiriman.main:app`
behaves the same with or without `--env-file`.
"""

import os
from pathlib import Path

from pydantic import BaseModel


def _load_local_env_file() -> None:
    """
    Precedence:
    - Existing OS environment variables win.
    - .env fills only missing keys.
    """
    current = Path(__file__).resolve()
    project_root = current.parents[2]
    env_path = project_root / ".env"
    if not env_path.exists():
        return

    try:
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.lower().startswith("export "):
                line = line[7:].strip()
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()
            if not key:
                continue
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            os.environ.setdefault(key, value)
    except OSError:
        return


_load_local_env_file()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _as_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _normalize_csv(value: str | None) -> str:
    if value is None:
        return ""
    parts = [p.strip() for p in value.split(",")]
    return ",".join(p for p in parts if p)


class Settings(BaseModel):
    # Primary database connection string.
    # Example: mysql+pymysql://root:@127.0.0.1/pengiriman_barang
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pengiriman.db")

    # Echo generated SQL through the sqlalchemy.engine logger.
    SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO"), False)

    # Create missing tables on startup. Schema changes beyond that are
    # applied outside the service.
    AUTO_CREATE_TABLES: bool = _as_bool(os.getenv("AUTO_CREATE_TABLES"), True)

    # Authentication gate:
    # - disabled: every request is let through as an anonymous identity.
    # - jwt:      a valid Bearer token issued by /api/login is required.
    AUTH_MODE: str = os.getenv("AUTH_MODE", "disabled").strip().lower()

    # Token signing. Override JWT_SECRET outside local development.
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production-pengiriman-signing-key")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256").strip().upper()
    JWT_EXPIRES_MINUTES: int = _as_int(os.getenv("JWT_EXPIRES_MINUTES"), 60)

    # Listing pagination defaults.
    # LISTING_MAX_LIMIT caps both page size and row-range block size.
    LISTING_DEFAULT_LIMIT: int = _as_int(os.getenv("LISTING_DEFAULT_LIMIT"), 10)
    LISTING_MAX_LIMIT: int = _as_int(os.getenv("LISTING_MAX_LIMIT"), 1000)

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    # Flow logs are verbose per-request traces, off unless explicitly enabled.
    FLOW_LOGS_ENABLED: bool = _as_bool(os.getenv("FLOW_LOGS_ENABLED"), False)
    FLOW_LOGS_LISTING_ENABLED: bool = _as_bool(
        os.getenv("FLOW_LOGS_LISTING_ENABLED"), True
    )
    FLOW_LOGS_WRITES_ENABLED: bool = _as_bool(
        os.getenv("FLOW_LOGS_WRITES_ENABLED"), True
    )

    # Comma-separated list of allowed browser origins; "*" for development.
    CORS_ORIGINS: str = _normalize_csv(os.getenv("CORS_ORIGINS") or "*")


settings = Settings()
