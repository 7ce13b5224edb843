from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from ..errors import InvalidEmailError, RetailOpsError, error_message
from ..lookup import OrderLookupService
from ..models import ErrorOut, OrderSearchOut
from ..repository import open_repository


router = APIRouter(prefix="/api/orders", tags=["orders"])

_log = logging.getLogger("retailops.routes.orders")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _json(payload: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=payload, status_code=status_code, headers=CORS_HEADERS)


def _error(message: str, status_code: int) -> JSONResponse:
    return _json(ErrorOut(error=message).model_dump(), status_code=status_code)


async def _email_from_request(request: Request):
    if request.method == "POST":
        try:
            body = await request.json()
        except ValueError:
            raise InvalidEmailError()
        if not isinstance(body, dict):
            raise InvalidEmailError()
        return body.get("email")
    return request.query_params.get("email")


@router.options("/search-by-email")
def search_orders_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route(
    "/search-by-email",
    methods=["GET", "POST"],
    response_model=OrderSearchOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def search_orders_by_email(request: Request, repo=Depends(open_repository)):
    try:
        email = await _email_from_request(request)
        service = OrderLookupService(repo)
        result = await run_in_threadpool(service.lookup, email)
    except RetailOpsError as exc:
        if exc.status_code >= 500:
            _log.error("[search-orders-by-email] Error: %s", error_message(exc))
        return _error(error_message(exc), exc.status_code)
    except Exception as exc:
        _log.exception("[search-orders-by-email] Error: %s", error_message(exc))
        return _error(error_message(exc), 500)

    return _json(result.to_payload())
