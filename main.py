import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from config import Settings, load_settings
from database import create_db_and_tables, make_engine
from errors import register_exception_handlers
from routes import auth, tasks

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around one engine and one signing secret

    Args:
        settings: Explicit configuration; read from the environment when omitted
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Task Tracker API",
        description="Authenticated personal task tracking",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.engine = make_engine(settings.database_url, echo=settings.db_echo)

    # CORS configuration: a single trusted frontend origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, tags=["auth"])
    app.include_router(tasks.router, tags=["tasks"])

    @app.on_event("startup")
    def on_startup():
        """Create database tables on startup"""
        create_db_and_tables(app.state.engine)
        logger.info("Database ready")

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()

    @app.get("/")
    def read_root():
        """Root endpoint"""
        return {
            "message": "Task Tracker API is running",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
