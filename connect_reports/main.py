"""
Application entry point.
Run with:  uvicorn connect_reports.main:app --reload

Every reporting request must carry the Stripe secret key in the
X-Secret-Key header; nothing is stored server-side.
"""
import logging

import stripe
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from connect_reports.core.logging_config import configure_logging
from fastapi.middleware.cors import CORSMiddleware

from connect_reports.core.config import settings
from connect_reports.core.exceptions import ReportValidationError, UpstreamServiceError
from connect_reports.api.v1.router import api_router

configure_logging()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    logger = logging.getLogger(__name__)
    logger.info("Starting FastAPI application setup")
    stripe.max_network_retries = settings.STRIPE_MAX_NETWORK_RETRIES

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Daily transaction reports and exports across Stripe Connect "
            "connected accounts."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error translation ───────────────────────────────────────────────────
    @app.exception_handler(ReportValidationError)
    async def on_validation_error(_: Request, exc: ReportValidationError) -> JSONResponse:
        """Reject malformed report parameters with HTTP 400."""
        logger.warning("Rejected report request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Bad Request", "message": str(exc)},
        )

    @app.exception_handler(UpstreamServiceError)
    async def on_upstream_error(_: Request, exc: UpstreamServiceError) -> JSONResponse:
        """Surface payments API outages with HTTP 502."""
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"success": False, "error": "Bad Gateway", "message": str(exc)},
        )

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        """Liveness probe."""
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()
