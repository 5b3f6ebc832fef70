"""
Custom exception classes and FastAPI exception handlers.

The repository layer raises these domain errors without importing any HTTP
concepts; the handlers registered here translate them into JSON responses.

Exception hierarchy:
    LedgerAPIError (base)
    ├── StorageError   — connection acquisition or SQL execution failed
    └── NotFoundError  — an INSERT ... RETURNING produced no row

Both kinds are server faults, so both map to HTTP 500. The underlying driver
error is chained onto StorageError (``raise ... from exc``) and logged, but
never echoed back to the client.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class LedgerAPIError(Exception):
    """Base exception for all ledger domain errors."""

    error_type = "ledger_error"
    status_code = 500

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class StorageError(LedgerAPIError):
    """
    Raised when the database cannot be reached or a statement fails.

    Covers pool exhaustion, network failures and constraint violations
    such as a duplicate transaction id.
    """

    error_type = "storage_error"

    def __init__(self, detail: str = "Storage backend failure"):
        super().__init__(detail)


class NotFoundError(LedgerAPIError):
    """Raised when an insert reports success but returns no row."""

    error_type = "not_found"

    def __init__(self, detail: str = "Inserted transaction was not returned"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    Each handler responds with a consistent JSON body:
    {"detail": "error message", "error_type": "<kind>"}

    This is called once during app startup in main.py.
    """

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logging.error(
            f"{request.method} {request.url.path} failed: {exc.detail} (cause: {exc.__cause__!r})"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_type": exc.error_type},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(
        request: Request, exc: NotFoundError
    ) -> JSONResponse:
        logging.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_type": exc.error_type},
        )
