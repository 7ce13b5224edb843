"""Customer order lookup by email.

Resolves a customer from an email address, pulls their order history newest
first and summarizes it. Read only; nothing here is cached between calls.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import psycopg

from .errors import InvalidEmailError, OrderRetrievalError
from .models import CustomerOrderOut, CustomerOut, OrderSearchOut, OrderSummaryOut
from .stores import STORE_REGISTRY, StoreInfo, store_name


_log = logging.getLogger("retailops.lookup")
_TAG = "[search-orders-by-email]"

NOT_FOUND_MESSAGE = "No customer found with this email"


def normalize_email(email: Any) -> str:
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmailError()
    return email.strip().lower()


def summarize_orders(orders: Iterable[Mapping[str, Any]]) -> OrderSummaryOut:
    orders = list(orders)
    total = len(orders)
    total_spent = sum(float(o.get("total_price") or 0) for o in orders)
    opt_in_count = sum(1 for o in orders if o.get("opt_in") is True)
    opt_out_count = sum(1 for o in orders if o.get("opt_in") is False)

    return OrderSummaryOut(
        total_orders=total,
        total_spent=total_spent,
        average_order_value=(total_spent / total) if total > 0 else 0.0,
        opt_in_count=opt_in_count,
        opt_out_count=opt_out_count,
        opt_in_rate=(opt_in_count / total) * 100 if total > 0 else 0.0,
    )


def enrich_orders(
    orders: Iterable[Mapping[str, Any]],
    registry: Mapping[str, StoreInfo] = STORE_REGISTRY,
) -> List[CustomerOrderOut]:
    return [
        CustomerOrderOut(**{**o, "store_name": store_name(o.get("user_id"), registry)})
        for o in orders
    ]


class OrderLookupService:
    def __init__(self, repository, registry: Mapping[str, StoreInfo] = STORE_REGISTRY):
        self._repo = repository
        self._registry = registry

    def _resolve_customer(self, email: str) -> Optional[Dict[str, Any]]:
        # Lookup failures are reported as "not found", same as an empty result.
        try:
            return self._repo.find_customer_by_email(email)
        except psycopg.Error as exc:
            _log.warning("%s Customer lookup failed: %s", _TAG, exc)
            return None

    def lookup(self, email: Any) -> OrderSearchOut:
        search_email = normalize_email(email)
        _log.info("%s Searching for: %s", _TAG, search_email)

        customer = self._resolve_customer(search_email)
        if not customer:
            _log.info("%s Customer not found", _TAG)
            return OrderSearchOut(
                success=True,
                customer=None,
                orders=[],
                summary=None,
                message=NOT_FOUND_MESSAGE,
            )

        _log.info("%s Found customer: %s", _TAG, customer["id"])

        try:
            orders = self._repo.orders_for_customer(customer["id"])
        except psycopg.Error as exc:
            _log.error("%s Error fetching orders: %s", _TAG, exc)
            raise OrderRetrievalError(str(exc)) from exc

        orders = list(orders or [])
        _log.info("%s Found %s orders", _TAG, len(orders))

        return OrderSearchOut(
            success=True,
            customer=CustomerOut(**customer),
            orders=enrich_orders(orders, self._registry),
            summary=summarize_orders(orders),
        )
