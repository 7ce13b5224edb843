from __future__ import annotations

import logging
import uuid
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request

from .config import get_settings
from .routes.kpis import router as kpis_router
from .routes.orders import router as orders_router
from .routes.stores import router as stores_router


_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_PROJECT_ROOT / ".env")

app = FastAPI(title="Retail Ops API")

_log = logging.getLogger("retailops")
if not _log.handlers:
    logging.basicConfig(level=get_settings().log_level, format="%(asctime)s %(levelname)s %(message)s")


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    _log.info("rid=%s method=%s path=%s status=%s", rid, request.method, request.url.path, response.status_code)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(orders_router)
app.include_router(stores_router)
app.include_router(kpis_router)


@app.get("/")
def home():
    return {"status": "ok", "message": "Retail Ops API. Open /docs for endpoints."}
