"""FastAPI main application."""

import logging
import sys
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devagenda.api import auth, github, projects, reflections, reports
from devagenda.config import settings
from devagenda.core.errors import DevAgendaError
from devagenda.database import Base, engine
from devagenda import models  # noqa: F401

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

# Create tables (use Alembic migrations in production)
if settings.auto_create_tables:
    Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name, version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(DevAgendaError)
def handle_app_error(request: Request, exc: DevAgendaError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
def handle_http_error(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()) if p != 'body')}: {e.get('msg')}"
        for e in errors
    )
    return error_response(400, message or "Invalid request")


@app.exception_handler(SQLAlchemyError)
def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} database error: {exc}", exc_info=True)
    return error_response(500, f"Database error: {exc}")


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} unexpected error: {exc}", exc_info=True)
    return error_response(500, str(exc) or "Internal server error")


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(github.router, prefix="/api/github", tags=["github"])
app.include_router(reports.router, prefix="/api/reports", tags=["reports"])
app.include_router(reflections.router, prefix="/api/reflections", tags=["reflections"])


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {
        "success": True,
        "message": f"{settings.app_name} API is running",
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }


def run():
    """Run the development server."""
    import uvicorn

    uvicorn.run("devagenda.api.main:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    run()
