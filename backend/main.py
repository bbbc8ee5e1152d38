#!/usr/bin/env python
"""
backend/main.py

Sets up the FastAPI application for the expense ledger API.

Key Roles:
 - Loads environment variables & configures logging
 - Connects to the database at startup and flips the readiness state;
   a failed connection aborts startup
 - Gates every request on that readiness state (503 until ready)
 - Adds CORS middleware for frontend integration
 - Includes the auth ('register'/'login') and entry routers
 - Translates domain exceptions into JSON error bodies
"""

import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

# Load environment variables from a .env file at the project root
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from backend.database import DatabaseState, connect_and_create_tables, engine
from backend.deps import require_db_ready
from backend.exceptions import LedgerError, ValidationError
from backend.routers import entry, user

# ---------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
ALLOWED_ORIGINS = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

# ---------------------------------------------------------
# Startup / Shutdown
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connect and create tables before serving. If the database cannot be
    reached the exception propagates and the server never starts.
    """
    state: DatabaseState = app.state.db_state
    try:
        await run_in_threadpool(connect_and_create_tables)
    except Exception:
        logger.exception("Failed to connect to the database; aborting startup")
        raise
    state.mark_ready()
    yield
    state.mark_unavailable()
    engine.dispose()

# ---------------------------------------------------------
# Initialize the FastAPI application
# ---------------------------------------------------------
app = FastAPI(
    title="Expense Ledger API",
    description=(
        "Personal income/expense ledger. Register, log in for a bearer token, "
        "then manage your own entries and monthly summary."
    ),
    version="1.0",
    lifespan=lifespan,
    dependencies=[Depends(require_db_ready)],
)
app.state.db_state = DatabaseState()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOWED_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# Error Handlers
# ---------------------------------------------------------
@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    logger.warning(f"{request.method} {request.url.path}: validation failed: {exc.messages}")
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.messages})


@app.exception_handler(LedgerError)
async def handle_ledger_error(request: Request, exc: LedgerError):
    logger.warning(f"{request.method} {request.url.path}: {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path}: database error")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

# ---------------------------------------------------------
# Routers
# ---------------------------------------------------------
app.include_router(user.router)
app.include_router(entry.router)

# ---------------------------------------------------------
# Root Route
# ---------------------------------------------------------
@app.get("/")
def read_root():
    """
    Basic root path to confirm the API is running.
    """
    return {"message": "Expense Ledger API is running"}

# ---------------------------------------------------------
# Local Run
# ---------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
    )
