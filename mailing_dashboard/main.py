"""
Main FastAPI application entry point.
Configures and initializes the Mailing Dashboard API.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from mailing_dashboard.core.config import settings
from mailing_dashboard.core.dependencies import get_data_source
from mailing_dashboard.core.exception_handler import register_exception_handlers
from mailing_dashboard.core.logging_config import get_logger, setup_logging
from mailing_dashboard.api.routes import comparison_routes, dashboard_routes, health_routes, upload_routes

setup_logging(settings.log_level)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_data_source().close()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Call-center analytics: recordings, mailing imports and compatibility exports",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)

# Register routes
app.include_router(health_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(upload_routes.router)
app.include_router(comparison_routes.router)


# Middleware to log request paths
@app.middleware("http")
async def log_request(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    response = await call_next(request)
    return response


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
