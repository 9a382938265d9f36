"""
Main FastAPI application entry point.
Builds the application, its database engine and token issuer, and includes routers.
"""
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from . import __version__
from .appointments.router import router as appointments_router
from .auth.router import router as auth_router
from .config import Settings, get_settings
from .core.middleware import setup_middlewares
from .core.security import TokenIssuer
from .database import Base, build_engine, build_session_factory, get_db
from .doctors.router import router as doctors_router
from .exceptions import register_exception_handlers
from .messages.router import router as messages_router
from .patients.router import router as patients_router
from . import models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine=None) -> FastAPI:
    """
    Build the FastAPI application.

    Every shared collaborator (engine, session factory, token issuer) is
    constructed here once and kept on ``app.state``; request dependencies
    read it from there.

    Args:
        settings: Explicit settings; read from the environment when omitted
        engine: Pre-built SQLAlchemy engine; built from ``settings.database_url`` when omitted

    Returns:
        FastAPI: The configured application

    Raises:
        TokenConfigurationError: If the JWT signing key is missing or too short
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting Medical Appointments API...")

    # Fail fast on an insecure signing key
    token_issuer = TokenIssuer(settings)

    engine = engine or build_engine(settings.database_url)
    if settings.auto_create_tables:
        # Create database tables if they don't exist
        Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="Medical Appointments API",
        description="API for patient/doctor registration, profiles, appointments and messages",
        version=__version__,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = token_issuer

    # Register exception handlers
    register_exception_handlers(app)

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware
    setup_middlewares(app)

    # Include routers
    prefix = settings.api_prefix.rstrip("/")
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(doctors_router, prefix=f"{prefix}/doctors", tags=["Doctors"])
    app.include_router(patients_router, prefix=f"{prefix}/patients", tags=["Patients"])
    app.include_router(appointments_router, prefix=f"{prefix}/appointments", tags=["Appointments"])
    app.include_router(messages_router, prefix=f"{prefix}/messages", tags=["Messages"])

    @app.get("/")
    def root():
        """
        Root endpoint for API health check.

        Returns:
            dict: Simple welcome message
        """
        return {"message": "Welcome to Medical Appointments API", "version": __version__}

    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        """
        Health check endpoint for monitoring.

        Returns:
            dict: Health status information
        """
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}

    return app


def run():
    """Console entry point: serve the application with uvicorn."""
    import uvicorn

    # Load environment variables from .env file first
    load_dotenv()
    uvicorn.run("medical.main:create_app", factory=True, host="0.0.0.0", port=8000)
