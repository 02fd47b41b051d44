from contextlib import asynccontextmanager
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from wellness.core.access import AccessGate, NutritionistAllowlist
from wellness.core.config import Settings, settings
from wellness.core.errors import WellnessError
from wellness.db.base import Base
from wellness.db.session import SessionLocal, engine
from wellness.middleware.request_logging import RequestLoggingMiddleware

# Configure logging
_handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    _handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up {settings.PROJECT_NAME} ({settings.ENVIRONMENT.value})...")

    try:
        existing_tables = inspect(engine).get_table_names()
        required_tables = [table.name for table in Base.metadata.tables.values()]
        missing_tables = [table for table in required_tables if table not in existing_tables]
        if missing_tables:
            logger.warning(f"Missing database tables: {missing_tables}")
            logger.warning("Run the migrations before serving traffic: alembic upgrade head")
        else:
            logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    if not settings.SECRET_KEY:
        logger.error("SECRET_KEY is not set; every authenticated request will fail")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        message = err.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    @app.exception_handler(WellnessError)
    async def wellness_error_handler(request: Request, exc: WellnessError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error} ({exc.detail}) - {request.method} {request.url.path}")
        include_detail = exc.status_code < 500 or not app_settings.is_production
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(include_detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid input", "detail": _format_validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions"""
        logger.exception(f"Unhandled exception: {exc} - {request.method} {request.url.path}")
        body = {"error": "Internal server error"}
        if not app_settings.is_production:
            body["detail"] = str(exc)
        return JSONResponse(status_code=500, content=body)


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        description="Corporate wellness program: companies, clients, follow-ups and risk questionnaires",
        openapi_url=f"{app_settings.API_PREFIX}/openapi.json",
        docs_url=f"{app_settings.API_PREFIX}/docs",
        lifespan=lifespan,
    )

    # Read-only after startup; handlers reach it through app.state
    app.state.access_gate = AccessGate(
        secret_key=app_settings.SECRET_KEY,
        allowlist=NutritionistAllowlist(app_settings.nutritionist_allowlist),
        expire_minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    logger.info(f"Nutritionist allowlist loaded with {len(app_settings.nutritionist_allowlist)} emails")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured with origins: {app_settings.allowed_cors_origins}")

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app, app_settings)

    from wellness.api.v1.api import api_router

    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    @app.get("/health", tags=["Health Check"])
    def health_check():
        """Liveness plus a database round-trip"""
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
            db_status = "healthy"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            db_status = "unhealthy"
        return {
            "status": "healthy",
            "version": app_settings.VERSION,
            "project": app_settings.PROJECT_NAME,
            "database": db_status,
        }

    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run(
        "wellness.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
