"""
Alumni Tracking API - Main Application

FastAPI backend with:
- MongoDB for alumni, employment records, users and file metadata
- Local disk for uploaded photos / certificates (served from /uploads)
- JWT authentication with admin / user roles

Run: uvicorn alumni_api.main:app --reload
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from alumni_api import __version__
from alumni_api.api.routes import api_router
from alumni_api.core.config import Settings, get_settings
from alumni_api.core.errors import StorageError, register_exception_handlers
from alumni_api.core.logging_config import setup_logging
from alumni_api.db.mongodb import db_operation, init_mongo_indexes, test_mongo_connection

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Alumni Tracking API",
        description="""
    Tracks alumni of a university and where they work.

    ## Features
    - **Authentication**: JWT-based auth, admin and user roles
    - **Alumni**: Profiles with search, sorting and pagination
    - **Pekerjaan**: Employment history, trash and restore
    - **Files**: Photo and certificate uploads per alumni
    """,
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    # Serve uploaded files; the directory is created at startup
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    @app.on_event("startup")
    def startup_event():
        """Create the upload directory, check MongoDB and create indexes."""
        os.makedirs(settings.upload_dir, exist_ok=True)
        if not test_mongo_connection():
            logger.warning("MongoDB is not reachable, requests will fail until it is")
            return
        logger.info("Connected to MongoDB database '%s'", settings.mongodb_db)
        try:
            with db_operation(settings.db_connect_timeout_seconds):
                init_mongo_indexes()
        except StorageError as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.get("/health", tags=["Health"])
    def health_check():
        """Liveness plus MongoDB reachability."""
        return {
            "status": "healthy",
            "mongodb": "connected" if test_mongo_connection() else "disconnected",
        }

    return app


app = create_app()
