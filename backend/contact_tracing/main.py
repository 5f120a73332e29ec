import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contact_tracing.api.routes.admin import router as admin_router
from contact_tracing.api.routes.auth import router as auth_router
from contact_tracing.api.routes.health import router as health_router
from contact_tracing.api.routes.interactions import router as interactions_router
from contact_tracing.api.routes.notifications import router as notifications_router

from contact_tracing.core.config import settings
from contact_tracing.core.errors import ContactTracingError, DependencyFailure
from contact_tracing.services.accounts import seed_demo_users
from contact_tracing.store.provider import StoreProvider, build_store_provider

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _handle_dependency_failure(request: Request, exc: DependencyFailure) -> JSONResponse:
    logger.exception("[%s %s] dependency failure: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": "server error"})


async def _handle_contact_tracing_error(request: Request, exc: ContactTracingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # same {"error": ...} shape as every other rejected request
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "invalid request")
    return JSONResponse(status_code=400, content={"error": f"{field}: {msg}" if field else msg})


def create_app(stores: Optional[StoreProvider] = None) -> FastAPI:
    """Build the API around a store provider (memory or SQL, from settings by default)."""
    app = FastAPI(title=settings.PROJECT_NAME, version="1.0")
    app.state.stores = stores if stores is not None else build_store_provider(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DependencyFailure, _handle_dependency_failure)
    app.add_exception_handler(ContactTracingError, _handle_contact_tracing_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/api")
    app.include_router(interactions_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(notifications_router, prefix="/api")

    @app.on_event("startup")
    def _startup_store() -> None:
        app.state.stores.prepare()
        if settings.SEED_DEMO_USERS:
            with app.state.stores.session() as store:
                seed_demo_users(store)
        logger.info("[CORS] allow_origins = %s", settings.cors_origins_list)

    return app


_configure_logging()
app = create_app()
