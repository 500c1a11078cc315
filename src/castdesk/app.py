"""FastAPI application factory for castdesk."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from castdesk.common.config import get_settings
from castdesk.common.exceptions import CastdeskError
from castdesk.common.logging import get_logger, setup_logging
from castdesk.common.schemas import ErrorResponse, HealthResponse

logger = get_logger("app")


def _error_body(error: str, details=None) -> dict:
    return ErrorResponse(error=error, details=details).model_dump(exclude_none=True)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CastdeskError)
    async def castdesk_error_handler(request: Request, exc: CastdeskError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=_error_body("Invalid input data", [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in exc.errors()
            ]),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", str(exc)),
        )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from castdesk.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from castdesk.accounts.router import router as accounts_router
    from castdesk.casting.router import router as casting_router
    from castdesk.messaging.router import router as messaging_router

    prefix = settings.api_prefix
    app.include_router(accounts_router, prefix=prefix, tags=["studio"])
    app.include_router(casting_router, prefix=prefix, tags=["casting"])
    app.include_router(messaging_router, prefix=prefix, tags=["messaging"])

    return app
