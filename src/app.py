"""Storefront FastAPI application.

Serves the REST API under ``/api`` and uploaded images under ``/uploads``.
Every request runs inside the storefront domain context and commands are
processed synchronously.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay in domain.toml:
#   - unset/"test" → memory database, sync event processing
#   - "production" → PostgreSQL, async event processing via server.py
from storefront.api.schemas import ErrorResponse
from storefront.domain import storefront  # noqa: E402
from storefront.shared import settings
from storefront.utils.logging import add_context, clear_context, get_logger

storefront.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce backend: auth, catalogue, cart, orders and admin dashboard",
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 500)},
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and bind request details to the log context."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    started = time.perf_counter()
    with storefront.domain_context():
        response = await call_next(request)
    logger.info(
        "request.completed",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


# ---------------------------------------------------------------------------
# Routers and error handling
# ---------------------------------------------------------------------------
from storefront.api.errors import register_exception_handlers  # noqa: E402
from storefront.catalogue.api import product_router, upload_router  # noqa: E402
from storefront.dashboard.api import router as dashboard_router  # noqa: E402
from storefront.identity.api import admin_user_router, auth_router, user_router  # noqa: E402
from storefront.ordering.api import cart_router, order_router  # noqa: E402

for router in (
    auth_router,
    user_router,
    admin_user_router,
    dashboard_router,
    product_router,
    upload_router,
    cart_router,
    order_router,
):
    app.include_router(router)

register_exception_handlers(app)

_upload_dir = Path(settings.upload_dir())
_upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=_upload_dir), name="uploads")


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
