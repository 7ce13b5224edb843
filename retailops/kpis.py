from __future__ import annotations

from typing import Dict, List, Optional

from .models import MetricCardOut


def percentage_change(current: float, previous: float) -> Optional[float]:
    if not previous:
        return None
    return round((current - previous) / previous * 100, 2)


def derive_metrics(totals: Dict[str, float]) -> Dict[str, float]:
    orders = int(totals.get("orders") or 0)
    revenue = float(totals.get("revenue") or 0)
    opt_in = int(totals.get("opt_in") or 0)
    return {
        "total_orders": float(orders),
        "total_revenue": revenue,
        "average_order_value": (revenue / orders) if orders > 0 else 0.0,
        "opt_in_rate": (opt_in / orders) * 100 if orders > 0 else 0.0,
    }


_TITLES = {
    "total_orders": "Total Orders",
    "total_revenue": "Total Revenue",
    "average_order_value": "Average Order Value",
    "opt_in_rate": "Opt-in Rate",
}


def metric_cards(current: Dict[str, float], previous: Dict[str, float]) -> List[MetricCardOut]:
    cur = derive_metrics(current)
    prev = derive_metrics(previous)

    cards: List[MetricCardOut] = []
    for key, title in _TITLES.items():
        change = percentage_change(cur[key], prev[key])
        cards.append(
            MetricCardOut(
                title=title,
                value=round(cur[key], 2),
                previous_value=round(prev[key], 2),
                change=change,
                is_positive=None if change is None else change >= 0,
            )
        )
    return cards
