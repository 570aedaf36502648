from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "SEO Audit Engine"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["*"]

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILE_NAME: str = "seo_audit.log"
    LOG_TO_FILE: bool = True

    # ── Engine ──────────────────────────────────
    # Upper bound enforced by the HTTP layer only; the engine accepts any string
    MAX_MARKUP_BYTES: int = 5_000_000
    # 0 or 1 runs the analyzers sequentially
    ANALYZER_WORKERS: int = 0

    # ── Rate limiting ───────────────────────────
    REDIS_URL: Optional[str] = None
    FORCE_IN_MEMORY_RATE_LIMITER: bool = False
    WHITELIST_IPS: List[str] = []
    RATE_LIMITS: Dict[str, int] = {
        "/api/v1/seo-audit/analyze": 60,
        "/api/v1/seo-audit/issues": 60,
        "/api/v1/seo-audit/report": 30,
        "/api/v1/seo-audit/demo": 30,
    }

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
