"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from provisioning.presentation import routes as provisioning_routes
from shared_kernel.middleware import PermissiveCORSMiddleware, install_error_handlers


@asynccontextmanager
async def provisioning_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_database_connections()


app = FastAPI(
    title="LMS Provisioning API",
    description="Privileged user provisioning for the LMS admin console",
    version=__version__,
    lifespan=provisioning_lifespan,
)

app.add_middleware(PermissiveCORSMiddleware)
install_error_handlers(app)

# Include provisioning bounded context routes
app.include_router(provisioning_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
