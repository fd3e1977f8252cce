from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.wishlist import StorageError, WishlistError

logger = logging.getLogger(__name__)


async def _wishlist_error_handler(request: Request, exc: WishlistError) -> JSONResponse:
    if isinstance(exc, StorageError):
        # Details stay in the log; clients get an opaque failure.
        logger.error("storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": StorageError.default_message})
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = first.get("msg") or "invalid request"
    message = f"Invalid request: {loc} {detail}".strip() if loc else f"Invalid request: {detail}"
    return JSONResponse(status_code=400, content={"message": message})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WishlistError, _wishlist_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
