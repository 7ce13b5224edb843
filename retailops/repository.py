from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import PostgresConfig, Settings, get_settings
from .db import connect


def _ts(x) -> str | None:
    if x is None:
        return None
    if hasattr(x, "isoformat"):
        return x.isoformat()
    return str(x)


def _num(x) -> float | None:
    if x is None:
        return None
    return float(x)


def _int(x) -> int | None:
    if x is None or x == "":
        return None
    return int(x)


def customer_from_row(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "name": row[1],
        "email": row[2],
        "phone": row[3],
        "created_at": _ts(row[4]),
    }


def order_from_row(row) -> Dict[str, Any]:
    return {
        "id": str(row[0]),
        "name": row[1],
        "total_price": _num(row[2]),
        "opt_in": row[3],
        "payment_status": row[4],
        "created_at": _ts(row[5]),
        "city": row[6],
        "province": row[7],
        "country": row[8],
        "user_id": _int(row[9]),
    }


class PostgresOrderRepository:
    """Read-only access to the imported customer and order tables.

    The connection is opened on first use and must be released with ``close()``.
    """

    def __init__(self, settings: Settings | None = None, cfg: PostgresConfig | None = None, conn=None):
        self._settings = settings or get_settings()
        self._cfg = cfg
        self._conn = conn

    def _connection(self):
        if self._conn is None:
            self._conn = connect(self._cfg)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def find_customer_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        query = f"""
            SELECT external_id, name, email, telephone, shopify_created_at
            FROM {self._settings.customers_table}
            WHERE email ILIKE %s
            LIMIT 1
            """

        with self._connection().cursor() as cur:
            cur.execute(query, (email,))
            row = cur.fetchone()

        if row is None:
            return None
        return customer_from_row(row)

    def orders_for_customer(self, customer_id: str) -> List[Dict[str, Any]]:
        query = f"""
            SELECT id, name, total_price, opt_in, payment_status, shopify_created_at,
                   city, province, country, user_id
            FROM {self._settings.orders_table}
            WHERE customer_id = %s
            ORDER BY shopify_created_at DESC
            """

        with self._connection().cursor() as cur:
            cur.execute(query, (customer_id,))
            rows = cur.fetchall()

        return [order_from_row(r) for r in rows]

    def order_counts_by_store(self) -> Dict[str, int]:
        query = f"""
            SELECT user_id, COUNT(*)
            FROM {self._settings.orders_table}
            WHERE user_id IS NOT NULL
            GROUP BY user_id
            """

        with self._connection().cursor() as cur:
            cur.execute(query)
            rows = cur.fetchall()

        return {str(r[0]): int(r[1]) for r in rows}

    def order_totals(self, date_from, date_to, store_id: Optional[int] = None) -> Dict[str, float]:
        """Order count, revenue and opt-in count for ``[date_from, date_to]`` (inclusive dates)."""
        query = f"""
            SELECT COUNT(*),
                   COALESCE(SUM(total_price), 0),
                   COUNT(*) FILTER (WHERE opt_in IS TRUE)
            FROM {self._settings.orders_table}
            WHERE shopify_created_at >= %s
              AND shopify_created_at < (%s::date + INTERVAL '1 day')
              AND (%s::integer IS NULL OR user_id = %s::integer)
            """

        with self._connection().cursor() as cur:
            cur.execute(query, (date_from, date_to, store_id, store_id))
            row = cur.fetchone()

        return {
            "orders": int(row[0]),
            "revenue": float(row[1]),
            "opt_in": int(row[2]),
        }


def open_repository():
    """FastAPI dependency yielding a repository bound to a per-request connection."""
    repo = PostgresOrderRepository()
    try:
        yield repo
    finally:
        repo.close()
