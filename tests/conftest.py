import re
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from retailops.main import app
from retailops.repository import open_repository


def _ilike(pattern: str, value: Optional[str]) -> bool:
    if value is None:
        return False
    rx = "".join(".*" if ch == "%" else "." if ch == "_" else re.escape(ch) for ch in pattern)
    return re.fullmatch(rx, value, flags=re.IGNORECASE | re.DOTALL) is not None


class FakeOrderRepository:
    """In-memory stand-in for PostgresOrderRepository."""

    def __init__(self, customers=None, orders=None, customer_error=None, orders_error=None):
        self.customers: List[Dict] = list(customers or [])
        self.orders: List[Dict] = list(orders or [])
        self.customer_error = customer_error
        self.orders_error = orders_error
        self.calls: List[tuple] = []
        self.closed = False

    def find_customer_by_email(self, email):
        self.calls.append(("customer", email))
        if self.customer_error is not None:
            raise self.customer_error
        for c in self.customers:
            if _ilike(email, c.get("email")):
                return {k: c.get(k) for k in ("id", "name", "email", "phone", "created_at")}
        return None

    def orders_for_customer(self, customer_id):
        self.calls.append(("orders", customer_id))
        if self.orders_error is not None:
            raise self.orders_error
        rows = [{k: v for k, v in o.items() if k != "customer_id"} for o in self.orders if o.get("customer_id") == customer_id]
        # Postgres puts NULLs first for DESC
        dated = sorted((r for r in rows if r.get("created_at")), key=lambda r: r["created_at"], reverse=True)
        return [r for r in rows if not r.get("created_at")] + dated

    def order_counts_by_store(self):
        counts: Dict[str, int] = {}
        for o in self.orders:
            if o.get("user_id") is None:
                continue
            key = str(o["user_id"])
            counts[key] = counts.get(key, 0) + 1
        return counts

    def order_totals(self, date_from, date_to, store_id=None):
        orders = 0
        revenue = 0.0
        opt_in = 0
        for o in self.orders:
            created = (o.get("created_at") or "")[:10]
            if not created or not (date_from.isoformat() <= created <= date_to.isoformat()):
                continue
            if store_id is not None and o.get("user_id") != store_id:
                continue
            orders += 1
            revenue += float(o.get("total_price") or 0)
            opt_in += 1 if o.get("opt_in") is True else 0
        return {"orders": orders, "revenue": revenue, "opt_in": opt_in}

    def close(self):
        self.closed = True


def make_order(oid, customer_id="C1", total_price=10.0, opt_in=None, created_at="2023-01-01T10:00:00+00:00", user_id=12, **extra):
    order = {
        "id": oid,
        "name": f"#{oid}",
        "customer_id": customer_id,
        "total_price": total_price,
        "opt_in": opt_in,
        "payment_status": "paid",
        "created_at": created_at,
        "city": "London",
        "province": "England",
        "country": "GB",
        "user_id": user_id,
    }
    order.update(extra)
    return order


JANE = {
    "id": "C1",
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+441234567890",
    "created_at": "2022-11-02T09:30:00+00:00",
}


@pytest.fixture()
def jane_repo():
    return FakeOrderRepository(
        customers=[JANE],
        orders=[
            make_order("o1", total_price=10, opt_in=True, created_at="2023-01-01T10:00:00+00:00"),
            make_order("o2", total_price=20, opt_in=False, created_at="2023-06-01T10:00:00+00:00", user_id=999),
            make_order("o3", total_price=30, opt_in=None, created_at="2023-03-01T10:00:00+00:00", user_id=None),
        ],
    )


@pytest.fixture()
def client_for():
    def _make(repo):
        app.dependency_overrides[open_repository] = lambda: repo
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
