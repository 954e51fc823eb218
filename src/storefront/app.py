"""Storefront FastAPI application.

Commands are processed synchronously inside each request, wrapped in the
storefront domain context.

Usage:
    uvicorn storefront.app:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import logger, storefront
from storefront.utils.logging import add_context, clear_context


@asynccontextmanager
async def lifespan(app: FastAPI):
    # PROTEAN_ENV selects the config overlay (memory adapters by default,
    # PostgreSQL under "production")
    storefront.init()
    logger.info("Storefront domain initialised", domain=storefront.name)
    yield


def create_app() -> FastAPI:
    from storefront.api import admin_router, cart_router, order_router, product_router
    from storefront.api.errors import register_error_handlers

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and order management",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        clear_context()
        add_context(method=request.method, path=request.url.path, user_id=request.headers.get("x-user-id"))
        with storefront.domain_context():
            response = await call_next(request)
        return response

    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    app.include_router(product_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


app = create_app()
