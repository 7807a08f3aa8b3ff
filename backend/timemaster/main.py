"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from timemaster import __version__
from timemaster.config import settings
from timemaster.errors import TimeMasterError
from timemaster.routers import auth, blocks, categories, pomodoro, stats, tasks
from timemaster.routers import settings as settings_router
from timemaster.store import Store, build_store

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TimeMasterError)
    async def handle_app_error(request: Request, exc: TimeMasterError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, str(exc) or "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the configured storage backend unless one was injected."""
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = build_store(settings)
    logger.info("TimeMaster started with %s storage", app.state.store.backend_name)
    yield
    if owns_store:
        app.state.store.close()


def create_app(store: Optional[Store] = None) -> FastAPI:
    """Build the application.

    Pass ``store`` to run against an explicit backend (tests do); otherwise the
    backend named by ``STORAGE_BACKEND`` is built on startup.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        lifespan=lifespan,
        title="TimeMaster",
        description="Personal tasks, time blocks and Pomodoro focus tracking",
        version=__version__,
    )
    app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(blocks.router, prefix="/api/blocks", tags=["TimeBlocks"])
    app.include_router(pomodoro.router, prefix="/api/pomodoro", tags=["Pomodoro"])
    app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])
    app.include_router(settings_router.router, prefix="/api/settings", tags=["Settings"])

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "storage": app.state.store.backend_name if app.state.store else None}

    return app


app = create_app()
