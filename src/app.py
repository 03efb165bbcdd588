"""Orderflow FastAPI application.

Web server for authoring order configs and moving orders through their
flows. Commands are processed synchronously and each request runs inside the
orderflow domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay from orderflow/domain.toml:
#   - "test"       → in-memory providers
#   - "production" → PostgreSQL at DATABASE_URL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from orderflow.domain import orderflow  # noqa: E402

orderflow.init()

_DOMAIN_PREFIXES = ("/order-configs", "/orders")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Orderflow API",
    description="Order workflow configuration and order progression",
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
    """Push the orderflow domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with orderflow.domain_context():
            return await call_next(request)
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from orderflow.api import order_config_router, order_router  # noqa: E402

app.include_router(order_config_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": orderflow.name})
