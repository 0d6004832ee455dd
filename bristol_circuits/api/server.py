"""
FastAPI server setup for the Bristol circuit API.
"""

import logging
import os
import time
import uuid
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..exceptions import BristolFormatError, UnsupportedGateType
from .endpoints import router
from .models import ErrorResponse

logger = logging.getLogger(__name__)

# Read by app_factory in each uvicorn worker process
DEBUG_ENV = "BRISTOL_CIRCUITS_DEBUG"


def _error_response(status_code: int, exc: BristolFormatError) -> JSONResponse:
    body = ErrorResponse(
        error=exc.kind,
        detail=str(exc),
        line_number=exc.line_number,
        line=exc.line,
        field=exc.field,
        expected=exc.expected,
        found=exc.found,
        timestamp=datetime.now(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def create_app(
    title: str = "Bristol Circuit API",
    description: str = "Parse and validate Bristol format boolean circuits",
    version: str = __version__,
    debug: bool = False,
    cors_origins: Optional[list] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title
        description: API description
        version: API version
        debug: Enable debug mode
        cors_origins: List of allowed CORS origins

    Returns:
        Configured FastAPI application
    """

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    app = FastAPI(
        title=title,
        description=description,
        version=version,
        debug=debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} - {process_time:.3f}s")

        response.headers["X-Process-Time"] = str(process_time)

        return response

    @app.exception_handler(UnsupportedGateType)
    async def unsupported_gate_handler(request: Request, exc: UnsupportedGateType):
        """Known Bristol gate that the parser does not implement."""
        logger.warning(f"Unsupported gate type in request: {exc}")
        return _error_response(501, exc)

    @app.exception_handler(BristolFormatError)
    async def bristol_format_handler(request: Request, exc: BristolFormatError):
        """Malformed circuit text."""
        logger.warning(f"Rejected malformed circuit: {exc}")
        return _error_response(422, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        request_id = str(uuid.uuid4())

        logger.error(f"Request {request_id} failed: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if debug else "An unexpected error occurred",
                "request_id": request_id,
                "timestamp": datetime.now().isoformat(),
            },
        )

    app.include_router(router, prefix="/api/v1", tags=["bristol"])

    @app.get("/", include_in_schema=False)
    async def root():
        return {"message": title, "docs": "/docs"}

    @app.get("/api/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": title,
            "version": version,
            "description": description,
            "endpoints": {
                "health": "/api/v1/health",
                "gate-types": "/api/v1/gate-types",
                "parse": "/api/v1/circuits/parse",
                "validate": "/api/v1/circuits/validate",
            },
        }

    logger.info(f"FastAPI application created: {title} v{version}")

    return app


def app_factory() -> FastAPI:
    """Application factory used by uvicorn; reads debug mode from the environment."""
    return create_app(debug=os.environ.get(DEBUG_ENV) == "1")


def run_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
    debug: bool = False,
    workers: int = 1,
):
    """
    Run the FastAPI server.

    Args:
        host: Server host
        port: Server port
        reload: Enable auto-reload
        debug: Enable debug mode
        workers: Number of worker processes
    """

    logger.info(f"Starting server on {host}:{port}")
    logger.info(f"Debug mode: {debug}")
    logger.info(f"Auto-reload: {reload}")
    logger.info(f"Workers: {workers}")

    if debug:
        os.environ[DEBUG_ENV] = "1"

    uvicorn.run(
        "bristol_circuits.api.server:app_factory",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info" if not debug else "debug",
        workers=workers if not reload else 1,
    )
