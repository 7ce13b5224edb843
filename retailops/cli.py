from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .lookup import OrderLookupService
from .models import OrderSearchOut
from .operations import OperationResult, run_operation
from .repository import PostgresOrderRepository


ORDER_COLUMNS = [
    "id",
    "name",
    "created_at",
    "total_price",
    "opt_in",
    "payment_status",
    "city",
    "province",
    "country",
    "user_id",
    "store_name",
]


def orders_frame(result: OrderSearchOut) -> pd.DataFrame:
    rows = [o.model_dump() for o in result.orders]
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def run_lookup(email: str, repo=None) -> OperationResult[OrderSearchOut]:
    own_repo = repo is None
    repo = repo or PostgresOrderRepository()
    try:
        return run_operation(OrderLookupService(repo).lookup, email)
    finally:
        if own_repo:
            repo.close()


def _cmd_lookup(args, repo=None) -> int:
    res = run_lookup(args.email, repo)
    if not res.ok:
        print(json.dumps({"success": False, "error": res.error}, indent=2))
        return 1
    print(json.dumps(res.data.to_payload(), indent=2))
    return 0 if res.data.customer is not None else 1


def _cmd_export(args, repo=None) -> int:
    res = run_lookup(args.email, repo)
    if not res.ok:
        print(f"error: {res.error}", file=sys.stderr)
        return 1
    if res.data.customer is None:
        print(f"error: {res.data.message}", file=sys.stderr)
        return 1

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    orders_frame(res.data).to_csv(out, index=False)
    print(f"wrote {len(res.data.orders)} orders to {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retailops")
    sub = parser.add_subparsers(dest="command", required=True)

    p_lookup = sub.add_parser("lookup", help="Look up a customer's orders by email")
    p_lookup.add_argument("--email", required=True)
    p_lookup.set_defaults(func=_cmd_lookup)

    p_export = sub.add_parser("export", help="Export a customer's orders to CSV")
    p_export.add_argument("--email", required=True)
    p_export.add_argument("--out", default="orders.csv")
    p_export.set_defaults(func=_cmd_export)

    return parser


def main(argv: Optional[List[str]] = None, repo=None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    return args.func(args, repo)


if __name__ == "__main__":
    sys.exit(main())
