"""FastAPI application factory."""

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from chari_stub import __version__
from chari_stub.api.responses import error_response
from chari_stub.api.routes import beneficiaries, customers, health, operations
from chari_stub.config import ChariStubConfig
from chari_stub.exceptions import AuthenticationError, ChariStubError, NoContentError
from chari_stub.logging import get_logger
from chari_stub.store import FixtureStore

logger = get_logger("chari_stub.api")


def create_app(
    config: ChariStubConfig | None = None,
    store: FixtureStore | None = None,
) -> FastAPI:
    """Build the stub application.

    Parameters
    ----------
    config : ChariStubConfig | None
        Settings; read from the environment when omitted.
    store : FixtureStore | None
        State to serve. A freshly seeded store is created when omitted.

    Returns
    -------
    FastAPI
        Application with every route, the API key check and the error
        mapping installed.
    """
    config = config or ChariStubConfig.from_env()
    store = store or FixtureStore.seeded(config.fixtures)

    app = FastAPI(title="Chari API Stub", version=__version__)
    app.state.config = config
    app.state.store = store

    @app.middleware("http")
    async def check_api_key(request: Request, call_next):
        started = time.perf_counter()
        if request.url.path not in config.auth.public_paths and not config.auth.is_allowed(
            request.headers.get("x-api-key")
        ):
            denied = AuthenticationError("Invalid or missing Chari API key")
            response = error_response(denied.status_code, str(denied))
        else:
            response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "extra": {
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                }
            },
        )
        return response

    @app.exception_handler(ChariStubError)
    async def handle_stub_error(request: Request, exc: ChariStubError):
        if isinstance(exc, NoContentError):
            return Response(status_code=exc.status_code)
        return error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_bad_request(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        return error_response(400, f"Invalid request: {fields}")

    @app.exception_handler(StarletteHTTPException)
    async def handle_unrouted(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            logger.warning("Unimplemented endpoint: %s %s", request.method, request.url.path)
            return error_response(501, f"Endpoint not implemented: {request.method} {request.url.path}")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")

    app.include_router(health.router)
    app.include_router(customers.router)
    app.include_router(operations.router)
    app.include_router(beneficiaries.router)

    return app
