"""
Blog Admin API

FastAPI backend for the admin panel's analytics dashboard and health
checks.
"""

import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pythonjsonlogger import jsonlogger
from starlette.middleware.base import BaseHTTPMiddleware

from . import __version__, config
from .analytics.errors import AggregationTimeout, AnalyticsValidationError, DataIntegrityError
from .auth.middleware import AuthMiddleware
from .db import init_db
from .routers.analytics import router as analytics_router
from .routers.health import router as health_router

# --- Logging ---

# Configure JSON Logging
logger = logging.getLogger()
logHandler = logging.StreamHandler(sys.stdout)
formatter = jsonlogger.JsonFormatter(
    "%(asctime)s %(levelname)s %(name)s %(message)s",
    rename_fields={"asctime": "timestamp", "levelname": "severity"}
)
logHandler.setFormatter(formatter)
logger.addHandler(logHandler)
logger.setLevel(config.LOG_LEVEL)

# --- Middleware ---

class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000

        log_data = {
            "event": "access_log",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "processing_time_ms": round(process_time, 2),
            "user_agent": request.headers.get("user-agent"),
            "client_ip": request.client.host if request.client else None,
        }

        # Add user if authenticated
        if getattr(request.state, "user", None):
            log_data["user"] = request.state.user

        logger.info("request_processed", extra=log_data)
        return response

# --- FastAPI App ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Blog Admin API",
    description="Content analytics for the blog admin panel",
    version=__version__,
    lifespan=lifespan,
)

# Middleware (Applied in reverse order: Last added is first executed)

# 3. Logging (Outermost - measures total time)
app.add_middleware(LoggingMiddleware)

# 2. Identity from the auth gateway
app.add_middleware(AuthMiddleware)

# 1. CORS (Innermost - handles preflight)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(analytics_router)

# --- Error Handlers ---

@app.exception_handler(AnalyticsValidationError)
async def validation_error_handler(request: Request, exc: AnalyticsValidationError):
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": str(exc), "parameter": exc.parameter},
    )


@app.exception_handler(DataIntegrityError)
async def data_integrity_error_handler(request: Request, exc: DataIntegrityError):
    # Corruption upstream, not a caller mistake
    logger.error(
        "data_integrity_violation",
        extra={"path": request.url.path, "record_id": exc.record_id, "error": str(exc)},
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Analytics aborted: content data failed an integrity check",
            "recordId": exc.record_id,
        },
    )


@app.exception_handler(AggregationTimeout)
async def aggregation_timeout_handler(request: Request, exc: AggregationTimeout):
    logger.error(f"Aggregation timeout on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=504,
        content={"success": False, "error": str(exc)},
    )


# --- Main entry point ---

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
