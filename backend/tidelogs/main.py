from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from tidelogs.api.routes.logs import router as logs_router
from tidelogs.api.routes.metrics import router as metrics_router
from tidelogs.core.config import settings
from tidelogs.core.errors import StoreError, ValidationError
from tidelogs.core.logging import configure_logging

logger = logging.getLogger("tidelogs")


# -------------------------
# Response helpers
# -------------------------
def ok(data: Any = None, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"success": True, "data": data, "error": None, "meta": meta or {}}


def fail(
    code: str,
    message: str,
    details: Optional[Any] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
        "meta": meta or {},
    }


# -------------------------
# App factory
# -------------------------
app = FastAPI(
    title="TideLogs API",
    version="0.1.0",
    default_response_class=ORJSONResponse,
)


# -------------------------
# Middleware
# -------------------------
app.add_middleware(GZipMiddleware, minimum_size=1024)

# CORS for the dashboard frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# Request-id + timing + body-size guard
@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start = time.perf_counter()

    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            if int(content_length) > settings.MAX_REQUEST_BYTES:
                return ORJSONResponse(
                    status_code=413,
                    content=fail(
                        code="PAYLOAD_TOO_LARGE",
                        message=f"Request too large. Max is {settings.MAX_REQUEST_MB} MB.",
                        meta={"request_id": request_id},
                    ),
                )
        except ValueError:
            pass

    response = await call_next(request)

    response.headers["x-request-id"] = request_id
    response.headers["x-response-ms"] = f"{(time.perf_counter() - start) * 1000:.2f}"
    return response


# -------------------------
# Routes
# -------------------------
@app.get("/health", response_class=ORJSONResponse)
async def health():
    # Keep it tiny & fast: used by docker/k8s/reverse proxies
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return ok({"status": "healthy", "timestamp": now.isoformat(), "env": settings.ENV})


app.include_router(logs_router, prefix="", tags=["logs"])
app.include_router(metrics_router, prefix="", tags=["metrics"])


# -------------------------
# Error handling
# -------------------------
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return ORJSONResponse(
        status_code=400,
        content=fail(
            code="VALIDATION_ERROR",
            message=exc.message,
            details={"field": exc.field},
        ),
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure during %s on %s %s", exc.operation, request.method, request.url.path)
    return ORJSONResponse(
        status_code=500,
        content=fail(
            code="STORE_ERROR",
            message="The log store is unavailable.",
            details={"operation": exc.operation} if settings.ENV == "dev" else None,
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    # Show minimal debug info only in dev
    details = None
    if settings.ENV == "dev":
        details = {"type": exc.__class__.__name__, "message": str(exc)}

    return ORJSONResponse(
        status_code=500,
        content=fail(
            code="INTERNAL_ERROR",
            message="An unexpected error occurred.",
            details=details,
        ),
    )


# -------------------------
# Startup / shutdown
# -------------------------
@app.on_event("startup")
async def on_startup():
    configure_logging(settings.LOG_LEVEL)

    # These imports are inside startup so we don't create side effects on import.
    from tidelogs.db.seed import seed_sample_logs
    from tidelogs.db.session import AsyncSessionLocal, init_db

    # Raises StoreError after the last failed attempt, which aborts startup.
    await init_db()

    if settings.SEED_SAMPLE_DATA:
        async with AsyncSessionLocal() as session:
            await seed_sample_logs(session)

    logger.info("TideLogs backend ready (env=%s)", settings.ENV)


@app.on_event("shutdown")
async def on_shutdown():
    from tidelogs.db.session import dispose_db
    await dispose_db()
