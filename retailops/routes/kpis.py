from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
import psycopg

from ..date_ranges import DateRange, preset_range, previous_period
from ..kpis import metric_cards
from ..models import DateRangeOut, OrderKpisOut
from ..repository import open_repository


router = APIRouter(prefix="/api/kpis", tags=["kpis"])


def _resolve_range(preset: str | None, date_from: date | None, date_to: date | None) -> DateRange:
    if preset:
        try:
            return preset_range(preset)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    rng = DateRange(date_from, date_to)
    if not rng.is_complete:
        raise HTTPException(status_code=400, detail="Provide a preset or both date_from and date_to")
    if rng.from_date > rng.to_date:
        raise HTTPException(status_code=400, detail="date_from must be on or before date_to")
    return rng


def _range_out(rng: DateRange) -> DateRangeOut:
    return DateRangeOut(date_from=rng.from_date.isoformat(), date_to=rng.to_date.isoformat())


@router.get("/orders", response_model=OrderKpisOut)
def order_kpis(
    preset: str | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    store_id: int | None = Query(None),
    repo=Depends(open_repository),
) -> OrderKpisOut:
    current = _resolve_range(preset, date_from, date_to)
    previous = previous_period(current)

    try:
        cur_totals = repo.order_totals(current.from_date, current.to_date, store_id)
        prev_totals = repo.order_totals(previous.from_date, previous.to_date, store_id)
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

    return OrderKpisOut(
        store_id=None if store_id is None else str(store_id),
        current=_range_out(current),
        previous=_range_out(previous),
        metrics=metric_cards(cur_totals, prev_totals),
    )
