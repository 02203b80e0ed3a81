from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from taskmind.ai_service import DEFAULT_AI_MODEL
from taskmind.constants import DEFAULT_PROBE_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Settings:
    database_path: Path
    probe_timeout: float
    auto_init_schema: bool
    openai_api_key: Optional[str]
    openai_model: str
    host: str
    port: int
    log_level: str


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise RuntimeError(f"{name} must be a boolean (got {raw!r})")


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)

    db_raw = os.getenv("DATABASE_PATH", "data/taskmind.db").strip()
    timeout_raw = os.getenv("STORAGE_PROBE_TIMEOUT", str(DEFAULT_PROBE_TIMEOUT_SECONDS)).strip()
    port_raw = os.getenv("PORT", "5000").strip()

    try:
        probe_timeout = float(timeout_raw)
    except ValueError:
        raise RuntimeError("STORAGE_PROBE_TIMEOUT invalid in .env") from None
    if probe_timeout <= 0:
        raise RuntimeError("STORAGE_PROBE_TIMEOUT must be positive")

    try:
        port = int(port_raw)
    except ValueError:
        raise RuntimeError("PORT invalid in .env") from None

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"LOG_LEVEL invalid in .env (got {log_level!r})")

    api_key = os.getenv("OPENAI_API_KEY", "").strip() or None

    # database_path stays relative to the working directory
    return Settings(
        database_path=Path(db_raw),
        probe_timeout=probe_timeout,
        auto_init_schema=_env_bool("DB_AUTO_INIT", True),
        openai_api_key=api_key,
        openai_model=os.getenv("OPENAI_MODEL", DEFAULT_AI_MODEL).strip() or DEFAULT_AI_MODEL,
        host=os.getenv("HOST", "127.0.0.1").strip(),
        port=port,
        log_level=log_level,
    )
