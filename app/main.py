"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app around an explicitly constructed VerificationStore
- Loads configuration and logging
- Registers API routes, exception handlers and static files
- No business logic should be written here
- Manages application lifecycle (startup validation, shutdown draining)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import sys
import time

from app.core.config import Settings, settings as default_settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.exceptions import ConfigurationError
from app.core.logging import setup_logging, get_logger
from app.services.sms_service import MessageSender
from app.services.twilio_service import TwilioService
from app.services.verification_store import VerificationStore
from app.api import health, verification

logger = get_logger(__name__)


def build_lifespan(config: Settings, store: VerificationStore, twilio: Optional[TwilioService]):
    """
    Application lifespan manager.
    Handles startup validation and shutdown cleanup.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting SMS verification service...")

        try:
            validate_settings(config)
        except ConfigurationError as e:
            for problem in e.details:
                logger.critical(problem)
            raise

        logger.info("✅ Configuration validated")
        logger.info(f"Environment: {config.ENVIRONMENT}")

        yield  # Application runs here

        logger.info("🛑 Shutting down SMS verification service...")

        # Let queued SMS go out before the HTTP client closes
        await store.drain()
        if twilio is not None:
            await twilio.close()
            logger.info("✅ Twilio client closed")

        logger.info("👋 SMS verification service shut down")

    return lifespan


def create_app(config: Optional[Settings] = None, sender: Optional[MessageSender] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        config: Settings to use (defaults to the environment-loaded settings)
        sender: MessageSender for outbound SMS (defaults to Twilio)

    Returns:
        Configured FastAPI app; the store is available as app.state.verification_store
    """
    config = config or default_settings

    twilio = None
    if sender is None:
        twilio = TwilioService.from_settings(config)
        sender = twilio

    store = VerificationStore(
        sender=sender,
        app_hash=config.APP_HASH,
        code_length=config.VERIFICATION_CODE_LENGTH,
        ttl_seconds=config.verification_ttl_seconds,
        dispatch_timeout=config.SMS_DISPATCH_TIMEOUT_SECONDS,
    )

    app = FastAPI(
        title="SMS Verify",
        description="Phone number verification with one-time SMS codes",
        version="1.0.0",
        lifespan=build_lifespan(config, store, twilio),
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,  # Disable docs in production
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.settings = config
    app.state.verification_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 5.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app, is_production=config.is_production)

    app.include_router(verification.router, prefix="/api", tags=["Verification"])
    app.include_router(health.router, tags=["Health"])

    # Mounted last so the API routes take precedence
    static_dir = Path(config.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app()


def main():
    """
    Console entry point: refuses to start without the required configuration.
    """
    import uvicorn

    setup_logging(default_settings.LOG_LEVEL, production=default_settings.is_production)

    try:
        validate_settings(default_settings)
    except ConfigurationError as e:
        for problem in e.details:
            print(problem, file=sys.stderr)
        sys.exit(1)

    logger.info(f"Server running on *:{default_settings.PORT}")
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
