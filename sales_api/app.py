"""
FastAPI application for the Sales Reports API.

This API exposes the sales collection to the reports dashboard.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sales_api.database import get_mongo_client
from sales_api.errors import DataAccessError
from sales_api.models import DataAccessErrorResponse, ErrorResponse, HealthResponse
from sales_api.routes import sales

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Sales Reports API...")
    yield
    logger.info("Shutting down API...")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Answer HTTP errors with the report error shape.

    Every unmatched path gets the same 404 body, whatever
    sub-resource was requested.
    """
    if exc.status_code == 404:
        message = "Not Found"
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Error"

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=message, status=exc.status_code).model_dump(),
        headers=getattr(exc, "headers", None)
    )


async def data_access_exception_handler(request: Request, exc: DataAccessError):
    """Turn a failed store query into a 500 response."""
    logger.error(
        "Data access error on %s (%s): %r", request.url.path, exc.operation, exc.cause
    )
    return JSONResponse(
        status_code=500,
        content=DataAccessErrorResponse(
            message=exc.message,
            error=exc.describe_cause()
        ).model_dump()
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DataAccessError, data_access_exception_handler)


app = FastAPI(
    title="Sales Reports API",
    description="Sales reports by region and by customer",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    """Add response timing header."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000
    response.headers["X-Process-Time-Ms"] = str(round(process_time, 2))
    return response


register_error_handlers(app)
app.include_router(sales.router)


@app.get("/", tags=["Root"])
def root():
    """API root endpoint."""
    return {
        "message": "Sales Reports API",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Verifies MongoDB connectivity.
    """
    try:
        client = get_mongo_client()
        client.admin.command("ping")
        mongo_status = "connected"
    except PyMongoError as e:
        mongo_status = f"error: {str(e)}"

    return HealthResponse(
        status="healthy" if mongo_status == "connected" else "unhealthy",
        mongodb=mongo_status,
        timestamp=datetime.now()
    )
