# smarttravel/main.py
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Configuration and DB
from smarttravel.config import settings
from smarttravel.core.db import init_db, close_db
from smarttravel.core.errors import AppError, ConfigurationError, app_error_handler, validation_error_handler

from smarttravel.api.v1.routers import user, chat, trips
from smarttravel.services.completion_factory import get_completion_service

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Every error leaves as {"message": ..., "cause"?: ...}; validation errors add "errors"
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)


@app.on_event("startup")
async def on_startup():
    # Refuse to start without signing secrets
    missing = settings.missing_secrets()
    if missing:
        logger.error("[config] missing required settings: %s", ", ".join(missing))
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
    await init_db(generate_schemas=settings.generate_schemas)
    logger.info("[db] Tortoise ORM initialised")
    # Logs a warning when the AI provider is not configured
    get_completion_service()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(user.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")
app.include_router(trips.router, prefix="/api/v1")


@app.get("/healthz")
def healthz():
    return {"ok": True}


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("smarttravel.main:app", host=settings.host, port=settings.port)
