"""Global error handlers ensuring request_id is included in JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.request_id import get_request_id
from app.domain.common.errors import CircleError
from app.infra.docstore import ConcurrentUpdateError
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CircleError)
    async def circle_error_handler(request: Request, exc: CircleError):  # type: ignore[override]
        obs_metrics.inc_domain_error(exc.reason)
        logger.info("domain_error", extra={"reason": exc.reason, "status": exc.status_code})
        payload = {"detail": exc.message, "reason": exc.reason, "request_id": get_request_id(request)}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(ConcurrentUpdateError)
    async def conflict_handler(request: Request, exc: ConcurrentUpdateError):  # type: ignore[override]
        obs_metrics.inc_domain_error(exc.reason)
        payload = {
            "detail": "The resource changed while handling the request; try again.",
            "reason": exc.reason,
            "request_id": get_request_id(request),
        }
        return JSONResponse(status_code=409, content=payload)

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        payload = {"detail": exc.detail, "reason": "http_error", "request_id": get_request_id(request)}
        return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        payload = {
            "detail": "validation_error",
            "reason": "bad_values",
            "errors": jsonable_encoder(exc.errors()),
            "request_id": get_request_id(request),
        }
        return JSONResponse(status_code=422, content=payload)
