"""
FastAPI application entry point.

COVID Testing Analytics - ingests the data.gouv.fr daily testing CSV
(per department, day and age class) and serves derived reports.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import Settings, configure_logging, ensure_directories
from app.database import create_db_engine, create_session_factory, init_db
from app.exceptions import CovidAnalyticsError
from app.routers import analytics, ingestion
from app.schemas.common import HealthResponse
from app.services.datagouv_source import DataGouvSource
from contextlib import asynccontextmanager
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    source=None
) -> FastAPI:
    """
    Build the application from explicit configuration.

    Args:
        settings: Configuration, read from the environment when omitted
        engine: Database engine, built from settings when omitted
        source: CSV source, a DataGouvSource on DATAGOUV_URL when omitted
    """
    settings = settings or Settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the data directory and tables on startup."""
        ensure_directories(settings)
        init_db(app.state.engine)
        logger.info(f"✅ Database initialized at {app.state.engine.url!r}")
        yield

    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="""
    **COVID Testing Analytics API**

    Daily COVID-19 test results per French department and age class,
    imported from data.gouv.fr.

    ## Key Features

    * **Import**: Fetch the published CSV and upsert it
    * **Raw data**: Records filtered by day range and departments
    * **National reports**: Daily totals and positivity ratio
    * **Department resume**: Days with most tests, positives and highest ratio
    * **Daily top 5**: Highest positivity departments per age class

    All dates use the YYYY-MM-DD format.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.state.settings = settings
    app.state.engine = engine or create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.source = source or DataGouvSource(
        settings.DATAGOUV_URL,
        timeout=settings.SOURCE_TIMEOUT_SECONDS
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(ingestion.router, prefix=settings.API_PREFIX, tags=["Ingestion"])
    app.include_router(analytics.router, prefix=settings.API_PREFIX, tags=["Analytics"])

    @app.get("/", tags=["Root"])
    def root():
        """API root endpoint with basic information."""
        prefix = settings.API_PREFIX
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
            "endpoints": {
                "import": f"{prefix}/import",
                "departments": f"{prefix}/departments",
                "age_categories": f"{prefix}/age_categories",
                "days": f"{prefix}/days",
                "data": f"{prefix}/data",
                "national": f"{prefix}/national",
                "department": f"{prefix}/department",
                "daily_top5": f"{prefix}/daily_top5"
            }
        }

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """Health check endpoint."""
        try:
            with app.state.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            db_status = "healthy"
        except Exception as e:
            db_status = f"unhealthy: {str(e)}"

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "version": settings.VERSION,
            "database": db_status
        }

    register_exception_handlers(app)
    return app


def register_exception_handlers(app: FastAPI):
    """Render every error as {"error": message}."""

    @app.exception_handler(CovidAnalyticsError)
    async def application_error_handler(request: Request, exc: CovidAnalyticsError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} raised an unexpected error")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


app = create_app()
