"""FastAPI application entry point."""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, UTC
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from surveydesk.config import Settings, get_settings
from surveydesk.database import Database
from surveydesk.routers import analytics, auth, groups, health, responses, surveys, templates, users
from surveydesk.version import APP_VERSION

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)
api_logger = logging.getLogger("surveydesk.api")


class SQLTransactionFilter(logging.Filter):
    def filter(self, record):
        # Only filter INFO level messages
        if record.levelno == logging.INFO and hasattr(record, 'getMessage'):
            message = record.getMessage()

            # Filter out ROLLBACK, BEGIN, and "generated in" messages completely
            if any(keyword in message for keyword in ['ROLLBACK', 'BEGIN', 'COMMIT', 'generated in']):
                return False

            # Collapse multi-line statements onto one line
            if any(kw in message for kw in ['SELECT', 'DELETE', 'INSERT', 'UPDATE']):
                record.msg = ' '.join(message.split())
                record.args = ()

        return True


def configure_logging(settings: Settings) -> None:
    """Console + rotating file logging, with SQL and API requests in their own files."""
    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_file = logs_dir / "surveydesk.log"
    sql_log_file = logs_dir / "surveydesk_sql.log"
    api_log_file = logs_dir / "surveydesk_api.log"

    # 1 MB per file, keep 5 backups
    rotating_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
    rotating_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    sql_rotating_handler = RotatingFileHandler(sql_log_file, maxBytes=1024 * 1024, backupCount=5, encoding='utf-8')
    sql_rotating_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    sql_rotating_handler.addFilter(SQLTransactionFilter())

    api_rotating_handler = RotatingFileHandler(api_log_file, maxBytes=2 * 1024 * 1024, backupCount=15, encoding='utf-8')
    api_rotating_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))

    # Force=True overrides any existing configuration (e.g., from uvicorn)
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(), rotating_handler],
        force=True,
    )

    api_logger.handlers.clear()
    api_logger.addHandler(api_rotating_handler)
    api_logger.setLevel(logging.INFO)
    api_logger.propagate = False

    uvicorn_access_logger = logging.getLogger("uvicorn.access")
    uvicorn_access_logger.setLevel(logging.INFO)
    if rotating_handler not in uvicorn_access_logger.handlers:
        uvicorn_access_logger.addHandler(rotating_handler)

    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine.Engine")
    sqlalchemy_logger.handlers.clear()
    sqlalchemy_logger.addHandler(sql_rotating_handler)
    sqlalchemy_logger.setLevel(logging.INFO)
    sqlalchemy_logger.propagate = False

    logger.info("*" * 36 + " Logging system initialized " + "*" * 36)
    logger.info(f"General logging to: {log_file.absolute()}")
    logger.info(f"Current UTC time: {datetime.now(UTC)}")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = " -> ".join(str(x) for x in loc[1:]) if len(loc) > 1 else "unknown field"
        errors.append({
            "field": field_path,
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "unknown"),
        })

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": errors,
        },
    )


async def log_requests(request: Request, call_next):
    """Log every API request with its status code and timing to the API log."""
    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"
    method = request.method
    path = request.url.path

    request_id = f"{method}:{path}:{int(start_time * 1000) % 100000}"
    api_logger.info(f">> {request_id} | START | {method} {path} | IP: {client_ip}")
    if request.query_params:
        api_logger.info(f">> {request_id} | QUERY | {request.query_params}")

    try:
        response = await call_next(request)
    except Exception as e:
        api_logger.error(
            f"<< {request_id} | EXCEPTION | {method} {path} | "
            f"Error: {str(e)[:100]} | Time: {time.time() - start_time:.3f}s"
        )
        raise

    api_logger.info(
        f"<< {request_id} | COMPLETE | {method} {path} | "
        f"Status: {response.status_code} | Time: {time.time() - start_time:.3f}s"
    )
    return response


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around one process-wide :class:`Database`."""
    settings = settings or get_settings()
    database = database or Database(settings)

    @asynccontextmanager
    async def lifespan(app_instance: FastAPI):
        logger.info("=" * 60)
        logger.info("SurveyDesk API Starting")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'SQLite'}")
        logger.info("=" * 60)

        if settings.create_tables_on_startup:
            await database.create_all()

        try:
            yield
        finally:
            await database.dispose()
            logger.info("SurveyDesk API Shutting Down... Goodbye!")

    app = FastAPI(
        title="SurveyDesk API",
        description="Survey authoring, assignment and analytics backend",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(groups.router, prefix="/api/groups", tags=["groups"])
    app.include_router(surveys.router, prefix="/api/surveys", tags=["surveys"])
    app.include_router(templates.router, prefix="/api/templates", tags=["templates"])
    app.include_router(responses.router, prefix="/api/responses", tags=["responses"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])

    @app.get("/")
    async def root():
        return {"message": "SurveyDesk API", "version": APP_VERSION}

    return app


configure_logging(get_settings())
app = create_app()
