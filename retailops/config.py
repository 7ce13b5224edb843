from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_PROJECT_ROOT / ".env")

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _table_name(env_key: str, default: str) -> str:
    name = (os.getenv(env_key) or default).strip()
    if not _TABLE_NAME_RE.match(name):
        raise ValueError(f"{env_key} must be a plain [schema.]table name, got {name!r}")
    return name


@dataclass(frozen=True)
class PostgresConfig:
    host: str = field(default_factory=lambda: os.getenv("PGHOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("PGPORT", "5432")))
    database: str = field(default_factory=lambda: os.getenv("PGDATABASE", "retailops"))
    user: str = field(default_factory=lambda: os.getenv("PGUSER", "retailops"))
    password: str = field(default_factory=lambda: os.getenv("PGPASSWORD", "retailops"))
    connect_timeout: int = field(default_factory=lambda: int(os.getenv("PGCONNECT_TIMEOUT", "10")))

    def dsn(self) -> str:
        return (
            f"host={self.host} port={self.port} dbname={self.database} "
            f"user={self.user} password={self.password} connect_timeout={self.connect_timeout}"
        )


@dataclass(frozen=True)
class Settings:
    customers_table: str = field(
        default_factory=lambda: _table_name("RETAILOPS_CUSTOMERS_TABLE", "public.imported_customers")
    )
    orders_table: str = field(
        default_factory=lambda: _table_name("RETAILOPS_ORDERS_TABLE", "public.imported_orders")
    )
    host: str = field(default_factory=lambda: os.getenv("RETAILOPS_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("RETAILOPS_PORT", "8000")))
    log_level: str = field(default_factory=lambda: (os.getenv("RETAILOPS_LOG_LEVEL") or "INFO").upper())


def get_settings() -> Settings:
    return Settings()
