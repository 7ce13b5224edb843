from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
import psycopg

from ..models import StoreListOut, StoreOut
from ..repository import open_repository
from ..stores import store_info


router = APIRouter(prefix="/api/stores", tags=["stores"])

_log = logging.getLogger("retailops.routes.stores")


@router.get("", response_model=StoreListOut)
def list_stores(repo=Depends(open_repository)) -> StoreListOut:
    try:
        counts = repo.order_counts_by_store()
    except psycopg.OperationalError:
        raise HTTPException(
            status_code=503,
            detail=(
                "PostgreSQL connection failed. Set PGHOST/PGPORT/PGDATABASE/PGUSER/PGPASSWORD in .env "
                "and ensure PostgreSQL is running."
            ),
        )
    except (psycopg.errors.UndefinedTable, psycopg.errors.InvalidSchemaName):
        raise HTTPException(
            status_code=500,
            detail="Orders table not found. Check RETAILOPS_ORDERS_TABLE.",
        )

    stores = []
    for store_id, n in counts.items():
        info = store_info(store_id)
        stores.append(
            StoreOut(id=store_id, name=info.name, domain=info.domain, currency=info.currency, order_count=n)
        )
    stores.sort(key=lambda s: s.order_count, reverse=True)

    _log.info("store mapping: %s", ", ".join(f"{s.id}={s.name} ({s.order_count})" for s in stores))
    return StoreListOut(total_stores=len(stores), stores=stores)
