"""
FastAPI application and entry point.

This module creates and configures the FastAPI application:
  1. Lifespan manager — creates the transactions table on startup (optional)
     and disposes of the connection pool on shutdown
  2. CORS middleware — allows the web frontend to call the API
  3. Exception handlers — maps domain errors to HTTP responses
  4. Router registration — mounts the /transactions endpoints

Running locally:
    ledger-api                      # binds SERVER_HOST:SERVER_PORT
    uvicorn ledger_api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import ledger_api.models  # noqa: F401  (registers tables on Base.metadata)
from ledger_api.config import settings
from ledger_api.database import engine, Base, ensure_sqlite_directory
from ledger_api.exceptions import register_exception_handlers
from ledger_api.routers import transactions

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
      Creates the SQLite data directory when needed. With CREATE_SCHEMA set,
      also creates the transactions table if it doesn't exist. This is a
      development convenience; production databases are expected to be
      provisioned ahead of time.

    Shutdown:
      Disposes of the engine, closing all pooled connections.
    """
    # --- Startup ---
    ensure_sqlite_directory(settings.DATABASE_URL)
    if settings.CREATE_SCHEMA:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logging.info(f"Schema ready on {engine.url.render_as_string(hide_password=True)}")
    yield
    # --- Shutdown ---
    await engine.dispose()


configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Ledger REST API for listing and recording financial transactions",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """
    Liveness probe for load balancers and orchestrators.

    Does not touch the database.
    """
    return {"status": "ok", "version": settings.APP_VERSION}


class LedgerServer(uvicorn.Server):
    """uvicorn server that announces the address once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logging.info(f"Server running at http://{settings.server_addr}/")


def run() -> None:
    """Console entry point: serve the app on SERVER_HOST:SERVER_PORT."""
    config = uvicorn.Config(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    LedgerServer(config).run()
