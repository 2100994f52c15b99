#!/usr/bin/env python
"""
banana_bank/main.py

Sets up the FastAPI application for Banana Bank, a small banking demo API.

Key Roles:
 - Loads environment variables & configures CORS for frontend integration
 - Creates database tables at startup
 - Includes the 'user' and 'account' routers under /api
 - Renders request-parsing and database errors in the same {"errors": ...}
   shape the routers use
"""

import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from banana_bank.database import create_tables
from banana_bank.routers import account, user

# Load environment variables from a .env file at the project root
load_dotenv()

logger = logging.getLogger(__name__)

# Default CORS origins if none specified (dev environment)
default_origins = (
    "http://127.0.0.1:3000,"
    "http://localhost:3000,"
    "http://127.0.0.1:4000,"
    "http://localhost:4000"
)
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", default_origins)
ALLOWED_ORIGINS = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]


# ---------------------------------------------------------
# Database: Create Tables at Startup
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensures tables are created (if not already) when FastAPI starts.
    This won't delete or overwrite existing data; it's idempotent.
    """
    create_tables()
    logger.info("Banana Bank API started")
    yield
    logger.info("Banana Bank API stopped")


# ---------------------------------------------------------
# Initialize the FastAPI application
# ---------------------------------------------------------
app = FastAPI(
    title="Banana Bank API",
    description="CRUD API for bank users and their accounts.",
    version="1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------
# CORS Middleware
# ---------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------
# Exception Handlers
# ---------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    """
    Body could not be parsed into a field-set (bad JSON, wrong types).
    Report it as {"errors": {field: [messages]}} like any other 422.
    """
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        name = loc[-1] if loc else "body"
        errors.setdefault(name, []).append(err.get("msg", "is invalid"))
    logger.warning("422 validation: %s %s -> %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=422, content={"errors": errors})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"errors": "Internal server error"})


# ---------------------------------------------------------
# Routers (User, Account)
# ---------------------------------------------------------
app.include_router(user.router, prefix="/api/users", tags=["users"])
app.include_router(account.router, prefix="/api/accounts", tags=["accounts"])


# ---------------------------------------------------------
# Root Route
# ---------------------------------------------------------
@app.get("/")
def read_root():
    """
    Basic root path to confirm the API is running.
    """
    return {"message": "Welcome to Banana Bank!"}


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------
# Local Testing
# ---------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "banana_bank.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
