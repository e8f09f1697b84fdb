"""
Wallet Credit Scoring Service

A FastAPI-based service that turns wallet activity snapshots into credit
scores on the 300-850 scale, with a risk tier, a credit line, the factors
behind the score and suggestions for improving it.

The scoring engine itself (wallet_credit.scoring) is pure: it never fetches
data or touches shared state. This service adds the surrounding concerns:
- Reading the outstanding balance from the ledger collaborator
- Recording evaluations so spends can be checked against available credit
- Request tracing, structured logs and Prometheus metrics
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wallet_credit.api import router
from wallet_credit.config import settings
from wallet_credit.database import engine, Base
from wallet_credit.services.ledger_client import LedgerApiError
from wallet_credit.logging import (
    configure_logging,
    get_logger,
    set_request_context,
    clear_request_context,
    generate_request_id,
)
from wallet_credit import metrics

# Configure structured logging
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "service_starting",
        service_name=settings.service_name,
        ledger_api_base=settings.ledger_api_base,
        use_ledger_balance=settings.use_ledger_balance,
    )

    # Create tables if they don't exist (in production, use migrations)
    Base.metadata.create_all(bind=engine)

    logger.info("service_started", service_name=settings.service_name)

    yield

    logger.info("service_stopping", service_name=settings.service_name)


app = FastAPI(
    title="Wallet Credit Scoring Service",
    description="Credit scores, risk tiers and credit lines from wallet activity",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """
    Middleware for request tracing, logging, and metrics.

    Sets up request context with:
    - request_id: Unique identifier for tracing
    - Timing for duration_ms calculation
    - Prometheus metrics collection
    """
    method = request.method
    path = request.url.path

    # Skip logging/metrics for health and metrics endpoints
    if path in ("/health", "/metrics"):
        return await call_next(request)

    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    set_request_context(request_id)
    request.state.request_id = request_id

    start_time = time.perf_counter()

    logger.info("request_received", method=method, path=path)

    try:
        response = await call_next(request)

        duration_seconds = time.perf_counter() - start_time

        logger.info(
            "request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_seconds * 1000, 2),
        )
        metrics.record_http_request(method, path, response.status_code, duration_seconds)

        response.headers["X-Request-ID"] = request_id
        return response

    except Exception as e:
        duration_seconds = time.perf_counter() - start_time

        logger.error(
            "request_failed",
            method=method,
            path=path,
            duration_ms=round(duration_seconds * 1000, 2),
            error=str(e),
        )
        metrics.record_http_request(method, path, 500)

        raise

    finally:
        clear_request_context()


@app.exception_handler(LedgerApiError)
async def ledger_api_error_handler(request: Request, exc: LedgerApiError):
    """Handle ledger API errors."""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "ledger_api_error",
        status_code=exc.status_code,
        detail=exc.detail,
    )

    return JSONResponse(
        status_code=502,
        content={"detail": f"Ledger API error: {exc.detail}"},
        headers={"X-Request-ID": request_id},
    )


app.include_router(router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "ok", "service": settings.service_name}


@app.get("/metrics")
async def metrics_endpoint():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
