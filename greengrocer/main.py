"""
FastAPI Application Entry Point - GreenGrocer
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.sessions import SessionMiddleware

from greengrocer import __version__
from greengrocer.config import settings
from greengrocer.database import SessionLocal, init_db
from greengrocer.api import admin, auth, cart, categories, favorites, health, orders, products
from greengrocer.api.deps import get_memory_repository
from greengrocer.api.errors import register_exception_handlers
from greengrocer.repositories import SQLRepository
from greengrocer.services.auth_service import AuthService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="GreenGrocer",
    description="Online grocery storefront: catalog, cart, checkout, orders and back-office",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed-cookie sessions carrying the user id
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(cart.router)
app.include_router(favorites.router)
app.include_router(orders.router)
app.include_router(admin.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


def prepare_storage() -> None:
    """Create tables and seed data for the configured backend"""
    if settings.STORAGE_BACKEND == "memory":
        repository = get_memory_repository()
        _bootstrap_admin(repository)
        return
    
    init_db()
    db = SessionLocal()
    try:
        repository = SQLRepository(db)
        if settings.SEED_DEFAULT_CATEGORIES:
            repository.seed_default_categories()
        _bootstrap_admin(repository)
    finally:
        db.close()


def _bootstrap_admin(repository) -> None:
    if settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD:
        AuthService(repository).ensure_admin(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


@app.on_event("startup")
def startup_event():
    """Initialize storage on startup"""
    logger.info("Starting %s...", settings.SERVICE_NAME)
    prepare_storage()
    logger.info("Storage backend: %s", settings.STORAGE_BACKEND)
    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT)
