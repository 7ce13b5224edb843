from __future__ import annotations

import psycopg

from .config import PostgresConfig


def connect(cfg: PostgresConfig | None = None) -> psycopg.Connection:
    return psycopg.connect((cfg or PostgresConfig()).dsn())
