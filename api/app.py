"""
FastAPI Application

Main application setup and configuration.

Usage:
    from api.app import create_app
    app = create_app(config)

The process-wide instance lives in api/main.py.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.deps import build_access_log, build_proof_generator
from api.errors import APIError, api_error_handler, generic_error_handler, http_error_handler
from api.routes import health, proof
from core.access_log import AccessLog, AccessLogEntry, iso_timestamp
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.prover.generator import ProofGenerator


logger = logging.getLogger(__name__)


def _original_url(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def access_log_entry(request: Request) -> AccessLogEntry:
    """Describe an inbound request for the access log."""
    return AccessLogEntry(
        timestamp=iso_timestamp(),
        client=request.client.host if request.client else "unknown",
        method=request.method,
        url=_original_url(request),
        user_agent=request.headers.get("user-agent", "-"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: RuntimeConfig = app.state.config
    logger.info(
        f"Battleship ZK Proof Server running at http://{config.server.host}:{config.server.port}"
    )
    logger.info("Server ready to generate ZK proofs for Battleship game results!")
    try:
        yield
    finally:
        logger.info("Stop Server")


def create_app(
    config: RuntimeConfig | None = None,
    proof_generator: ProofGenerator | None = None,
    access_log: AccessLog | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Collaborators default to the ones described by ``config``; tests pass
    their own prover and access log.
    """
    config = config or load_runtime_config()

    app = FastAPI(
        title="Battleship ZK Proof API",
        description="""
HTTP API that proves Battleship game results with an external zkVM prover.

## Endpoints

- **POST /api/battleship/generate-proof** - Validate a game result and generate a proof
- **GET /api/battleship/debug** - Debug status
- **GET /battleship/health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.proof_generator = proof_generator or build_proof_generator(config)
    app.state.access_log = access_log or build_access_log(config)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next):
        entry = access_log_entry(request)
        try:
            await run_in_threadpool(app.state.access_log.record, entry)
        except Exception as e:
            logger.error(f"Error writing to log file: {e}")
        return await call_next(request)

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(proof.router)

    return app

