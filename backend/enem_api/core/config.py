from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_OVERRIDE_SOURCES = {"remote", "local", "none"}
# Frontend preview deployments.
_VERCEL_ORIGINS = r"https://.*\.vercel\.app"


def _load_dotenv() -> None:
    if os.getenv("ENEM_SKIP_DOTENV") == "1":
        return

    env_path = Path(__file__).resolve().parents[2] / ".env"
    if not env_path.exists():
        return

    from dotenv import load_dotenv

    load_dotenv(env_path, override=False)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_positive_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_positive_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    raw = value.strip()
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    env: str
    app_name: str
    log_level: str
    cors_origins: list[str]
    cors_origin_regex: str | None
    data_dir: Path
    override_source: str
    admin_base_url: str
    published_dir: Path
    override_timeout_seconds: float
    resolve_concurrency: int
    context_media_base: str
    files_media_base: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_dotenv()

    env = os.getenv("ENEM_ENV", "development")
    cors = os.getenv(
        "ENEM_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:3001,https://localhost:3000,https://localhost:3001",
    )
    override_source = os.getenv("ENEM_OVERRIDE_SOURCE", "remote").strip().lower() or "remote"
    if override_source not in _OVERRIDE_SOURCES:
        raise RuntimeError(
            f"ENEM_OVERRIDE_SOURCE must be one of {sorted(_OVERRIDE_SOURCES)}, got '{override_source}'"
        )

    return Settings(
        env=env,
        app_name="ENEM API",
        log_level=os.getenv("ENEM_LOG_LEVEL", "WARNING" if env == "production" else "INFO").upper(),
        cors_origins=_split_csv(cors),
        cors_origin_regex=os.getenv("ENEM_CORS_ORIGIN_REGEX") or (_VERCEL_ORIGINS if env == "production" else None),
        data_dir=Path(os.getenv("ENEM_DATA_DIR", "backend/data/public")),
        override_source=override_source,
        admin_base_url=os.getenv("ENEM_ADMIN_BASE_URL", "http://localhost:8001").rstrip("/"),
        published_dir=Path(os.getenv("ENEM_PUBLISHED_DIR", "admin-backend/data/questions-published")),
        override_timeout_seconds=_parse_positive_float(os.getenv("ENEM_OVERRIDE_TIMEOUT_SECONDS"), default=3.0),
        resolve_concurrency=_parse_positive_int(os.getenv("ENEM_RESOLVE_CONCURRENCY"), default=8),
        context_media_base=os.getenv("ENEM_CONTEXT_MEDIA_BASE", "/exams").rstrip("/"),
        files_media_base=os.getenv("ENEM_FILES_MEDIA_BASE", "https://enem-frontend.vercel.app/exams").rstrip("/"),
    )
