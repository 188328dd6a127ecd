"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rbac_server.core.config import settings
from rbac_server.core.exceptions import RBACError
from rbac_server.core.middleware import setup_middleware
from rbac_server.db.session import store

from rbac_server.api.auth import router as auth_router
from rbac_server.api.users import router as users_router
from rbac_server.api.roles import router as roles_router
from rbac_server.api.roles import legacy_router as legacy_roles_router
from rbac_server.api.permissions import router as permissions_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("rbac_server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s", settings.APP_NAME)
    if not store.exists():
        if settings.AUTO_SEED:
            from rbac_server.db.seeds import seed_store
            seed_store(store)
            logger.info("Seeded new document at %s", store.path)
        else:
            logger.warning(
                "Document %s does not exist; run `rbacctl db seed` first", store.path,
            )

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


def create_app() -> FastAPI:
    """Build the application with middleware, error handling and routers."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Hierarchical role-based access control API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Middleware
    setup_middleware(app)

    @app.exception_handler(RBACError)
    async def rbac_exception_handler(request: Request, exc: RBACError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        problems = []
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ())]
            location = ".".join(loc[1:] or loc) or "request"
            problems.append(f"{location}: {error['msg']}")
        return JSONResponse(
            status_code=422,
            content={"message": "Invalid request. " + "; ".join(problems)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Something went wrong!"})

    # Register routers
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(roles_router)
    app.include_router(legacy_roles_router)
    app.include_router(permissions_router)

    @app.get("/")
    async def root():
        return {
            "message": "RBAC API Server with Role Hierarchy",
            "endpoints": [
                "POST /auth/login",
                "POST /auth/logout (requires auth)",
                "GET /users (requires Manager/Admin role, filtered by hierarchy)",
                "GET /roles (requires Manager/Admin role, filtered by hierarchy)",
                "GET /permissions (requires auth)",
                "GET /profile (requires auth)",
            ],
            "hierarchy": (
                "Users can only see and manage users/roles at their level "
                "or below in the hierarchy"
            ),
        }

    @app.get("/health")
    async def health():
        """Quick health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
