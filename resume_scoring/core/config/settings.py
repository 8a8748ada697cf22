from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_EXTRACTION_BACKENDS = {"textract", "pdf"}


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    aws_region: str
    textract_endpoint_url: str | None
    resume_bucket: str | None
    extraction_backend: str
    extraction_timeout_s: float
    backend_url: str
    callback_path: str
    callback_timeout_s: float


def load_settings() -> Settings:
    loaded = Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        rate_limit=_get_env("RATE_LIMIT", "120/minute") or "120/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        aws_region=_get_env("AWS_REGION", "ap-south-1") or "ap-south-1",
        textract_endpoint_url=_get_env("TEXTRACT_ENDPOINT_URL"),
        resume_bucket=_get_env("RESUME_BUCKET"),
        extraction_backend=(_get_env("EXTRACTION_BACKEND", "textract") or "textract").strip().lower(),
        extraction_timeout_s=_get_env_float("EXTRACTION_TIMEOUT_S", 20.0),
        backend_url=(_get_env("BACKEND_URL", "http://localhost:5000") or "").rstrip("/"),
        callback_path=_get_env("CALLBACK_PATH", "/api/users/update-application-score")
        or "/api/users/update-application-score",
        callback_timeout_s=_get_env_float("CALLBACK_TIMEOUT_S", 10.0),
    )
    if loaded.extraction_backend not in _EXTRACTION_BACKENDS:
        raise RuntimeError("EXTRACTION_BACKEND must be either 'textract' or 'pdf'.")
    if loaded.extraction_timeout_s <= 0 or loaded.callback_timeout_s <= 0:
        raise RuntimeError("EXTRACTION_TIMEOUT_S and CALLBACK_TIMEOUT_S must be positive.")
    return loaded


settings = load_settings()
