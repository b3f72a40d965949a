import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .config import Settings, get_settings
from .database import build_engine, build_session_maker, init_db
from .routers import profile_router, pdf_import_router, activities_router, recommendations_router
from .services.auth import TokenVerifier
from .services.document_store import DocumentStore
from .services.profile_import import ProfileImportService
from .services.recommendations import GeminiClient, RecommendationService

logger = logging.getLogger(__name__)


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        # Add no-cache headers to API responses only
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: every collaborator is built once and shared through app.state
    settings: Settings = app.state.settings
    engine = build_engine(settings)
    await init_db(engine)

    store = DocumentStore(build_session_maker(engine))
    app.state.store = store
    app.state.token_verifier = TokenVerifier.from_settings(settings)
    app.state.import_service = ProfileImportService(store)
    app.state.recommendation_service = RecommendationService(GeminiClient.from_settings(settings))
    if settings.mock_auth_enabled:
        logger.warning("Mock authentication is enabled")
    logger.info(f"✅ {settings.app_name} started")

    yield

    # Shutdown
    await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Career profile, PDF import, activity log and recommendation API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,  # Disable docs in production
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    # CORS middleware - uses origins from environment variable
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(NoCacheMiddleware)

    app.include_router(profile_router)
    app.include_router(pdf_import_router)
    app.include_router(activities_router)
    app.include_router(recommendations_router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Beach Activity Tracker API", "status": "running", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancer"""
        return {"status": "healthy"}

    return app


app = create_app()
