from __future__ import annotations

from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enem_api.api.router import router as api_router
from enem_api.core.config import Settings, get_settings
from enem_api.core.logging import configure_logging


def root() -> dict[str, str]:
    return {"message": "ENEM API is running!"}


def health() -> dict[str, str]:
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title=settings.app_name, version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.add_api_route("/", root, methods=["GET"], tags=["health"])
    app.add_api_route("/health", health, methods=["GET"], tags=["health"])
    return app


settings = get_settings()
configure_logging(settings.log_level)

app = create_app(settings)
