"""Map storefront business errors onto HTTP responses.

Protean's own exceptions (``ValidationError`` and friends) are handled by
``protean.integrations.fastapi``; the handlers here cover the outcomes
defined in ``storefront.errors``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import (
    AccessDenied,
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    StorefrontError,
    TransactionError,
)

STATUS_CODES = {
    NotFoundError: 404,
    AccessDenied: 403,
    InsufficientStockError: 409,
    EmptyCartError: 400,
    TransactionError: 503,
}


def status_code_for(exc: StorefrontError) -> int:
    for error_class in type(exc).__mro__:
        if error_class in STATUS_CODES:
            return STATUS_CODES[error_class]
    return 400


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
