import sys
import time
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import v1_router
from src.api.health import health_router
from src.config.config import config
from src.services.chat_service import create_chat_service
from src.utils.logging_config import setup_logging

# Configure logging
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Loads the persisted chat transcript on startup unless a chat service was
    already attached to the app.
    """
    logger.info("Starting Weather Chat application")

    try:
        if not hasattr(app.state, "chat_service"):
            app.state.chat_service = create_chat_service()

        logger.info(
            "Weather Chat application started successfully",
            transcript_length=len(app.state.chat_service.get_messages()),
        )

        yield

    except Exception as e:
        logger.error("Failed to start Weather Chat", error=str(e))
        raise

    finally:
        logger.info("Shutting down Weather Chat")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Weather Chat API",
        description="""
        ## Weather Chat API

        A conversational weather assistant backed by Open-Meteo.

        ### Features:
        - **Chat**: Ask about the weather in plain language and keep a persisted transcript
        - **Current Weather**: Look up current conditions for any place name
        - **Forecast**: Get a 5-day forecast

        ### Example Queries:
        - "What's the weather in Tokyo?"
        - "Paris forecast"
        - "London"
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with timing information."""
        start_time = time.time()

        logger.info(
            "HTTP request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "HTTP request completed",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                process_time=process_time,
            )

            response.headers["X-Process-Time"] = str(process_time)
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "HTTP request failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
                process_time=process_time,
            )
            raise

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions globally."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True,
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again later.",
                "timestamp": time.time(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent formatting."""
        logger.warning(
            "HTTP exception",
            method=request.method,
            url=str(request.url),
            status_code=exc.status_code,
            detail=exc.detail,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "status_code": exc.status_code, "timestamp": time.time()},
        )

    app.include_router(health_router)
    app.include_router(v1_router)

    @app.get("/", tags=["Root"], include_in_schema=False)
    async def root():
        """Root endpoint providing basic system information."""
        return {
            "message": "Weather Chat API",
            "version": "1.0.0",
            "status": "running",
            "timestamp": time.time(),
            "docs": "/docs",
        }

    return app


# Create the application instance
app = create_app()


def main():
    logger.info(
        f"Starting Weather Chat server in {config.environment} environment",
        host=config.api_host,
        port=config.api_port,
    )

    try:
        uvicorn.run(
            app,
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
            access_log=True,
            server_header=False,
            date_header=False,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
