"""
taskery-api/app.py
Point d'entrée principal de l'API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_config
from logging_config import setup_logging
from api.endpoints import auth_router, task_router, user_router
from api.errors import register_error_handlers
from infrastructure.database.init_db import init_db

SERVICE_NAME = "taskery-api"
VERSION = "1.0.0"

# Initialiser la configuration
config = get_config()

# Configurer le logging
logger = setup_logging(
    log_level=config.log_level,
    log_file=config.log_file_path if config.log_file_enabled else None,
    colored=config.log_colored
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestion du cycle de vie de l'application"""
    # --- Startup ---
    logger.info("Starting Taskery API")
    logger.info(f"Database: {config.database_url.split('@')[-1]}")
    init_db()

    yield

    # --- Shutdown ---
    logger.info("Stopping Taskery API")


# Créer l'application FastAPI
app = FastAPI(
    title="Taskery API",
    description="API de gestion des utilisateurs et de leurs tâches",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(task_router, prefix="/api")


@app.get("/", tags=["Root"])
def root():
    """Page d'accueil de l'API"""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "operational",
        "documentation": "/docs"
    }


@app.get("/health", tags=["System"])
def health_check():
    """Endpoint de santé pour les orchestrateurs (Kubernetes, Docker, etc.)"""
    return {
        "status": "healthy",
        "service": SERVICE_NAME
    }


if __name__ == "__main__":
    import uvicorn
    from logging_config import get_uvicorn_log_config

    log_config = get_uvicorn_log_config(log_level=config.log_level)

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=log_config
    )
